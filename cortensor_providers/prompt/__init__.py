"""Backend prompt assembly."""

from .assembler import assemble_prompt, render_conversation

__all__ = ["assemble_prompt", "render_conversation"]
