"""
Script Synthesis Client - narration text from a prompt via Gemini.
"""
import logging

from mediaforge.config import LENGTH_GUIDES
from .gemini import GeminiClient

logger = logging.getLogger(__name__)


SCRIPT_PROMPT = """Generate a creative script {length_guide} based on the following prompt: "{prompt}".
Make it engaging, conversational and suitable for voice narration. Don't include any headers, just the script content."""


class ScriptClient(GeminiClient):
    """Generates narration scripts. A single attempt per call."""

    async def generate_script(self, prompt: str, length: str = "medium") -> str:
        """
        Generate narration text.

        Args:
            prompt: The user's idea
            length: "short", "medium" or "long"

        Returns:
            Plain narration text

        Raises:
            CredentialMissing: No Gemini key configured
            CredentialInvalid: Gemini rejected the key
            UpstreamError: Non-success status or no generated text
        """
        if length not in LENGTH_GUIDES:
            raise ValueError(f"Unknown script length: {length}")
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        instruction = SCRIPT_PROMPT.format(
            length_guide=LENGTH_GUIDES[length],
            prompt=prompt.strip(),
        )

        logger.info(f"[SCRIPT] Generating {length} script with {self.settings.script_model}")
        script = await self._generate_content(
            self.settings.script_model,
            instruction,
            "generate script",
        )
        script = script.strip()
        logger.info(f"[SCRIPT] Generated {len(script.split())} words")
        return script
