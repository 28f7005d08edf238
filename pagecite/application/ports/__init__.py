"""Application ports package.

Re-exports the ports the use cases depend on.
"""

from pagecite.application.ports.clock_port import ClockPort
from pagecite.application.ports.context_store_port import ContextStorePort
from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.application.ports.embedding_port import EmbeddingPort
from pagecite.application.ports.llm_port import (
    ChatMessage,
    LLMPort,
    LLMResponse,
    RawToolCall,
    ToolSpec,
)
from pagecite.application.ports.text_extractor_port import TextExtractorPort

__all__ = [
    "ClockPort",
    "ContextStorePort",
    "DocumentStorePort",
    "EmbeddingPort",
    "LLMPort",
    "ChatMessage",
    "LLMResponse",
    "RawToolCall",
    "ToolSpec",
    "TextExtractorPort",
]
