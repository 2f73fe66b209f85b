"""Constants for LLM module.

Centralizes default values and limits shared by the Ollama provider
and the embedding client.
"""

# =============================================================================
# Prompt Processing
# =============================================================================

# Maximum prompt length (chars) for sanitization.
# Candidate lists and intent prompts stay far below this; file content is
# capped separately by the representation builder.
MAX_PROMPT_LENGTH = 8000

# =============================================================================
# Timeout Settings (seconds)
# =============================================================================

# Local inference can be slow, especially on the first request while the
# model is loaded into memory.
OLLAMA_TIMEOUT = 120.0

# =============================================================================
# Default Models
# =============================================================================

DEFAULT_OLLAMA_URL = "http://localhost:11434"

# Embeddings for files and queries
DEFAULT_EMBED_MODEL = "nomic-embed-text"

# Small model that picks between close candidates
DEFAULT_DECISION_MODEL = "llama3.2:3b"

# Turns shell input into an AiAction
DEFAULT_INTENT_MODEL = "llama3:8b"

# Low temperature keeps the decider terse and repeatable
DECISION_TEMPERATURE = 0.1
