"""Turn split chunks into LMT_handle_jobs job descriptors."""

from typing import List, Sequence

from deeplx_bridge.logger import get_logger
from deeplx_bridge.lmt.exceptions import MalformedUpstreamResponse
from deeplx_bridge.lmt.models import Chunk, Job

logger = get_logger(__name__)


def build_jobs(chunks: Sequence[Chunk]) -> List[Job]:
    """
    Build one job per chunk, with the adjacent chunks' sentences as context.

    Job ids are the 1-based chunk positions. Only the first sentence of each
    chunk is translated; extra sentences are reported, not merged.

    Raises:
        MalformedUpstreamResponse: If a chunk carries no sentence
    """
    sentences = []
    for index, chunk in enumerate(chunks):
        sentence = chunk.sentence
        if sentence is None:
            raise MalformedUpstreamResponse(
                f"Invalid sentence structure in chunk {index}",
                stage="jobs",
                details={"chunk_index": index},
            )
        if len(chunk.sentences) > 1:
            logger.warning(
                f"Chunk {index} contains {len(chunk.sentences)} sentences; "
                f"only the first is translated"
            )
        sentences.append(sentence)

    jobs = []
    last = len(sentences) - 1
    for index, sentence in enumerate(sentences):
        jobs.append(Job(
            sentence=sentence,
            id=index + 1,
            context_before=[sentences[index - 1].text] if index > 0 else [],
            context_after=[sentences[index + 1].text] if index < last else [],
        ))
    return jobs
