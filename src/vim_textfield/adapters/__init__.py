"""Host integration: renderer capability and the Textual adapter."""

from .render import HostRenderer, NoopRenderer, Renderer

__all__ = ["Renderer", "NoopRenderer", "HostRenderer"]
