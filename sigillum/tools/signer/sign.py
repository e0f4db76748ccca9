"""Plugin exposing PDF signing and verification."""

from __future__ import annotations

from ...core.model import SignResult, VerificationResult
from ...core.utils import get_logger
from ...exceptions import SigningError
from ...signing import sign_file, verify_file
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("sigillum.tools.sign")


@register_tool("sign")
class SignTool(BaseTool):
    name = "sign"

    def run(self) -> SignResult:
        context = self.context
        if context.input_path is None or context.output_path is None:
            raise SigningError("Signing requires input and output paths")

        signer = context.config.get("name")
        extra = context.config.get("extra") or ""
        if not signer:
            raise SigningError("A signer name is required")

        LOGGER.debug(
            "Signing %s to %s as %s%s",
            context.input_path,
            context.output_path,
            signer,
            " with extra note" if extra else "",
        )
        result = sign_file(
            context.input_path,
            context.output_path,
            signer,
            extra,
            key_store=context.key_store(),
        )
        context.resources["result"] = result
        return result


@register_tool("verify")
class VerifyTool(BaseTool):
    name = "verify"

    def run(self) -> VerificationResult:
        context = self.context
        if context.input_path is None:
            raise SigningError("Verification requires an input path")

        LOGGER.debug("Verifying %s", context.input_path)
        result = verify_file(context.input_path)
        context.resources["result"] = result
        return result
