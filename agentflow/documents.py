"""Documents shared by loaders, retrievers and vector stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Document:
    """A chunk of content from any source, with free-form metadata."""

    page_content: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)