"""Core functionality for decade-styled image generation.

- **DecadeRestyler**: Top-level operation with prompt fallback
- **ResilientInvoker**: Bounded exponential-backoff retry loop
- **backend_registry**: Registry of image generation backends
- **EraframeConfig** / **config**: Settings loaded from ERAFRAME_* variables

Architecture Overview
---------------------
1. **Request Builder** (payloads.py): data URL decoding, decade markers,
   fallback prompt
2. **Resilient Invoker** (retry.py): fault classification and backoff
3. **Response Interpreter** (responses.py): picks the image out of a response
4. **Orchestrator** (restyler.py): primary cycle, then one fallback cycle on
   content rejection
5. **Backends** (backends.py, adapters/): SDK translation, lazy clients
"""

# Import adapters to ensure they're registered
from eraframe.core.adapters import GeminiFlashImageBackend  # noqa: F401
from eraframe.core.backends import BackendRegistry, ImageBackend, backend_registry
from eraframe.core.config import EraframeConfig, config
from eraframe.core.restyler import DecadeRestyler, generate_styled_image
from eraframe.core.retry import ResilientInvoker, RetryPolicy, classify_fault

__all__ = [
    "BackendRegistry",
    "DecadeRestyler",
    "EraframeConfig",
    "ImageBackend",
    "ResilientInvoker",
    "RetryPolicy",
    "backend_registry",
    "classify_fault",
    "config",
    "generate_styled_image",
]
