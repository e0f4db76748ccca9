"""Plugin exposing key pair management."""

from __future__ import annotations

from ...core.utils import get_logger
from ...exceptions import KeyStoreError
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("sigillum.tools.keys")


@register_tool("keygen")
class KeygenTool(BaseTool):
    """Generate a key pair and return the public key PEM."""

    name = "keygen"

    def run(self) -> str:
        store = self.context.key_store()
        LOGGER.debug("Generating key pair at %s", store.path)
        keypair = store.generate()
        self.context.resources["key_path"] = store.path
        return keypair.public_key


@register_tool("import-key")
class ImportKeyTool(BaseTool):
    """Store a key pair supplied as PEM text and return the public key PEM."""

    name = "import-key"

    def run(self) -> str:
        private_key = self.context.config.get("private_key")
        public_key = self.context.config.get("public_key")
        if not private_key or not public_key:
            raise KeyStoreError("Both a private and a public key are required")

        store = self.context.key_store()
        LOGGER.debug("Importing key pair into %s", store.path)
        keypair = store.import_keys(private_key, public_key)
        self.context.resources["key_path"] = store.path
        return keypair.public_key


@register_tool("export-key")
class ExportKeyTool(BaseTool):
    name = "export-key"

    def run(self) -> str:
        return self.context.key_store().export_private_key()


@register_tool("public-key")
class PublicKeyTool(BaseTool):
    name = "public-key"

    def run(self) -> str:
        return self.context.key_store().public_key()
