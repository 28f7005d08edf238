from pagecite.application.ports.clock_port import ClockPort
from pagecite.application.ports.context_store_port import ContextStorePort
from pagecite.application.ports.document_store_port import DocumentStorePort
from pagecite.application.ports.embedding_port import EmbeddingPort
from pagecite.application.ports.llm_port import LLMPort
from pagecite.application.ports.text_extractor_port import TextExtractorPort
from pagecite.application.services.relevance_ranker import RelevanceRanker
from pagecite.application.tools.executor import ToolExecutor
from pagecite.application.use_cases.answer_question import AnswerQuestion
from pagecite.application.use_cases.register_document import RegisterDocument
from pagecite.application.use_cases.run_agent_turn import ToolOrchestrator
from pagecite.application.use_cases.search_document import SearchDocument
from pagecite.application.use_cases.verify_citations import GuardrailVerifier
from pagecite.config.settings import AppSettings
from pagecite.infrastructure.embeddings.hf_sentence_transformers import HFEmbeddingAdapter
from pagecite.infrastructure.embeddings.openai_embedding_adapter import (
    NullEmbeddingAdapter,
    OpenAIEmbeddingAdapter,
)
from pagecite.infrastructure.llm.openai_chat_adapter import OpenAIChatAdapter
from pagecite.infrastructure.parsing.pdf_text_extractor import (
    PDFTextExtractorAdapter,
    PlainTextExtractorAdapter,
    SuffixDispatchExtractor,
)
from pagecite.infrastructure.stores.in_memory import InMemoryContextStore, InMemoryDocumentStore
from pagecite.infrastructure.time.system_clock import SystemClock


def build_embedding(settings: AppSettings) -> EmbeddingPort:
    backend = settings.embedding_backend

    if backend == "hf":
        return HFEmbeddingAdapter(
            model_name=settings.hf_embedding_model,
            device=settings.embedding_device,
        )

    if backend == "openai":
        return OpenAIEmbeddingAdapter(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
        )

    return NullEmbeddingAdapter()


def build_llm(settings: AppSettings) -> LLMPort:
    return OpenAIChatAdapter(
        api_key=settings.effective_llm_api_key,
        model=settings.llm_model,
        base_url=settings.llm_base_url or None,
        max_tokens=settings.llm_max_tokens,
    )


def build_extractor() -> TextExtractorPort:
    return SuffixDispatchExtractor(
        pdf=PDFTextExtractorAdapter(),
        plain=PlainTextExtractorAdapter(),
    )


def build_clock() -> ClockPort:
    """Build clock adapter for time operations.

    Note:
        Tests should inject a fixed clock instead.
    """
    return SystemClock()


def build_ranker(
    settings: AppSettings, embedding: EmbeddingPort | None = None
) -> RelevanceRanker:
    return RelevanceRanker(
        embedding=embedding or build_embedding(settings),
        snippet_max_chars=settings.snippet_max_chars,
    )


def build_search_use_case(
    settings: AppSettings,
    documents: DocumentStorePort,
    extractor: TextExtractorPort,
    embedding: EmbeddingPort | None = None,
) -> SearchDocument:
    return SearchDocument(
        documents=documents,
        extractor=extractor,
        ranker=build_ranker(settings, embedding),
        segment_window=settings.segment_window,
    )


def build_answer_use_case(
    settings: AppSettings,
    documents: DocumentStorePort,
    contexts: ContextStorePort,
    extractor: TextExtractorPort,
    llm: LLMPort | None = None,
    embedding: EmbeddingPort | None = None,
) -> AnswerQuestion:
    """Wire the chat pipeline: search -> tools -> orchestrator -> guardrail.

    Args:
        llm: Override for the chat model (defaults to the OpenAI adapter from settings).
             The orchestrator and the guardrail share one model client.
        embedding: Override for the ranking embedder (defaults to EMBEDDING_BACKEND).
    """
    model = llm or build_llm(settings)
    search = build_search_use_case(settings, documents, extractor, embedding)
    executor = ToolExecutor(
        documents=documents, contexts=contexts, extractor=extractor, search=search
    )
    return AnswerQuestion(
        documents=documents,
        contexts=contexts,
        orchestrator=ToolOrchestrator(model, executor, max_workers=settings.tool_workers),
        guardrail=GuardrailVerifier(search, model),
    )


class Container:
    """Process-wide wiring: one set of stores shared by every use case.

    Responsibilities:
    1. Read settings from environment (via AppSettings)
    2. Own the in-memory document and context stores
    3. Build the model clients once and reuse them across requests
    4. Hand out use cases wired against those stores
    """

    def __init__(self, settings: AppSettings | None = None, llm: LLMPort | None = None) -> None:
        self.settings = settings or AppSettings()
        self.documents = InMemoryDocumentStore()
        self.contexts = InMemoryContextStore(build_clock())
        self.extractor = build_extractor()
        self._llm = llm
        self._embedding: EmbeddingPort | None = None

    def get_embedding(self) -> EmbeddingPort:
        """Get or create embedding adapter based on settings."""
        if self._embedding is None:
            self._embedding = build_embedding(self.settings)
        return self._embedding

    def get_llm(self) -> LLMPort:
        """Get or create the chat model client."""
        if self._llm is None:
            self._llm = build_llm(self.settings)
        return self._llm

    def get_answer_use_case(self) -> AnswerQuestion:
        return build_answer_use_case(
            self.settings,
            self.documents,
            self.contexts,
            self.extractor,
            llm=self.get_llm(),
            embedding=self.get_embedding(),
        )

    def get_search_use_case(self) -> SearchDocument:
        return build_search_use_case(
            self.settings, self.documents, self.extractor, embedding=self.get_embedding()
        )

    def get_register_use_case(self) -> RegisterDocument:
        return RegisterDocument(self.documents, self.extractor)


def build_container(settings: AppSettings | None = None) -> Container:
    return Container(settings)
