"""runstream - SSE bridge that streams pre-built LLM workflow runs to clients."""

__version__ = "0.1.0"

from runstream.models.messages import InputMessage, RunRequest, ThreadResponse

__all__ = ["InputMessage", "RunRequest", "ThreadResponse"]
