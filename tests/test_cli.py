from __future__ import annotations

import json
import logging
from pathlib import Path

from click.testing import CliRunner

from sigillum.cli.main import cli
from sigillum.core.model import KeyPair
from sigillum.core.utils import set_verbosity
from sigillum.keys import KeyStore
from sigillum.signing import verify_file


def _invoke(key_path: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["--key-file", str(key_path), *args])


def test_keygen_stores_key_pair(tmp_path: Path) -> None:
    key_path = tmp_path / "keypair.json"

    result = _invoke(key_path, "keygen")

    assert result.exit_code == 0, result.output
    assert "Keypair generated" in result.output
    assert "BEGIN PUBLIC KEY" in result.output
    assert set(json.loads(key_path.read_text(encoding="utf-8"))) == {"public_key", "private_key"}


def test_export_and_public_key(key_path: Path, key_store: KeyStore, keypair: KeyPair) -> None:
    exported = _invoke(key_path, "export")
    public = _invoke(key_path, "public-key")

    assert exported.exit_code == 0
    assert exported.output.strip() == keypair.private_key.strip()
    assert public.output.strip() == keypair.public_key.strip()


def test_import_key(tmp_path: Path, keypair: KeyPair) -> None:
    private_file = tmp_path / "private.pem"
    public_file = tmp_path / "public.pem"
    private_file.write_text(keypair.private_key, encoding="utf-8")
    public_file.write_text(keypair.public_key, encoding="utf-8")
    key_path = tmp_path / "store" / "keypair.json"

    result = _invoke(
        key_path, "import-key", "--private-key", str(private_file), "--public-key", str(public_file)
    )

    assert result.exit_code == 0, result.output
    assert KeyStore(key_path).load() == keypair


def test_sign_and_verify(sample_pdf: Path, tmp_path: Path, key_path: Path, key_store: KeyStore) -> None:
    output = tmp_path / "signed.pdf"

    signed = _invoke(key_path, "sign", "-n", "Alice", "-e", "dept:legal", "-i", str(sample_pdf), "-o", str(output))

    assert signed.exit_code == 0, signed.output
    assert "PDF signed successfully" in signed.output
    assert verify_file(output).info.signer == "Alice"

    verified = _invoke(key_path, "verify", "-f", str(output))
    assert verified.exit_code == 0, verified.output
    assert "PDF has a digital signature" in verified.output
    assert "Alice" in verified.output
    assert "dept:legal" in verified.output


def test_verify_unsigned_exits_with_error(sample_pdf: Path, key_path: Path) -> None:
    result = _invoke(key_path, "verify", "-f", str(sample_pdf))

    assert result.exit_code == 1
    assert "does not contain a digital signature" in result.output


def test_sign_without_key_pair(sample_pdf: Path, tmp_path: Path) -> None:
    result = _invoke(
        tmp_path / "none.json", "sign", "-n", "Alice", "-i", str(sample_pdf), "-o", str(tmp_path / "o.pdf")
    )

    assert result.exit_code == 1
    assert "No keypair found" in result.output
    assert not (tmp_path / "o.pdf").exists()


def test_sign_rejects_invalid_pdf(tmp_path: Path, key_path: Path, key_store: KeyStore) -> None:
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf")

    result = _invoke(key_path, "sign", "-n", "Alice", "-i", str(broken), "-o", str(tmp_path / "o.pdf"))

    assert result.exit_code == 1
    assert "Error" in result.output


def test_verbose_flag_enables_debug_logging(sample_pdf: Path, key_path: Path) -> None:
    logger = logging.getLogger("sigillum")
    try:
        quiet = _invoke(key_path, "verify", "-f", str(sample_pdf))
        assert quiet.exit_code == 1
        assert logger.level == logging.WARNING

        verbose = CliRunner().invoke(cli, ["-v", "--key-file", str(key_path), "verify", "-f", str(sample_pdf)])
        assert verbose.exit_code == 1
        assert logger.level == logging.DEBUG
    finally:
        set_verbosity(False)


def test_sign_output_omits_missing_extra(sample_pdf: Path, tmp_path: Path, key_path: Path, key_store: KeyStore) -> None:
    output = tmp_path / "signed.pdf"

    signed = _invoke(key_path, "sign", "-n", "Alice", "-i", str(sample_pdf), "-o", str(output))
    assert signed.exit_code == 0, signed.output
    assert "Extra" not in signed.output

    verified = _invoke(key_path, "verify", "-f", str(output))
    assert "Extra" in verified.output
    assert "(none)" in verified.output
