from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from pagecite.domain.errors import EmbeddingUnavailable
from pagecite.domain.types import Result, Vector


@runtime_checkable
class EmbeddingPort(Protocol):
    def embed(self, texts: Sequence[str]) -> Result[list[Vector], EmbeddingUnavailable]:
        """Embed ``texts`` in one batch; vectors come back in input order.

        Never raises: missing credentials, transport errors and bad responses
        are reported as ``EmbeddingUnavailable``.
        """
        ...
