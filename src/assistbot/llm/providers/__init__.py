from .openrouter import OpenRouterProvider, extract_error_message

__all__ = ["OpenRouterProvider", "extract_error_message"]
