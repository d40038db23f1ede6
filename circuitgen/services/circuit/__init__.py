"""AI circuit design package: LLM designer with geometric fallback."""
from .candidate import CandidateRoute
from .designer import CircuitDesignerService
from .fallback import generate_fallback_circuits
from .llm_client import CircuitDesignLLMClient

__all__ = [
    "CandidateRoute",
    "CircuitDesignerService",
    "CircuitDesignLLMClient",
    "generate_fallback_circuits",
]
