"""
LMT Data Classes

Value objects passed between the pipeline stages. All of them live only for
the duration of one translate() call.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

RATE_LIMIT_CODE = 429
RATE_LIMIT_MESSAGE = "Too Many Requests"

# Job constants expected by the remote service
JOB_KIND = "default"
PREFERRED_NUM_BEAMS = 4


@dataclass
class RateLimited:
    """Structured 429 outcome, returned instead of raised."""
    code: int = RATE_LIMIT_CODE
    message: str = RATE_LIMIT_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


@dataclass
class Sentence:
    text: str
    prefix: str = ""


@dataclass
class Chunk:
    """A split unit; the protocol puts exactly one sentence in each chunk."""
    sentences: List[Sentence] = field(default_factory=list)

    @property
    def sentence(self) -> Optional[Sentence]:
        return self.sentences[0] if self.sentences else None


@dataclass
class SplitResult:
    chunks: List[Chunk]
    detected_language: Optional[str] = None


@dataclass
class Job:
    """Translation unit for one sentence plus its immediate neighbours."""
    sentence: Sentence
    id: int
    context_before: List[str] = field(default_factory=list)
    context_after: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "kind": JOB_KIND,
            "preferred_num_beams": PREFERRED_NUM_BEAMS,
            "raw_en_context_before": list(self.context_before),
            "raw_en_context_after": list(self.context_after),
            "sentences": [{
                "prefix": self.sentence.prefix,
                "text": self.sentence.text,
                "id": self.id,
            }],
        }


@dataclass
class TranslationResult:
    """Normalized outcome of a successful translate() call."""
    id: int
    data: str
    source_lang: str
    target_lang: str
    alternatives: List[str] = field(default_factory=list)
    code: int = 200

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "id": self.id,
            "data": self.data,
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "alternatives": list(self.alternatives),
        }
