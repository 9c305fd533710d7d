from notesynth.utils.logger import get_logger
from notesynth.workflow.state import PipelineState

logger = get_logger(__name__)


def finalize(state: PipelineState) -> PipelineState:
    stats = state.get("stats", {})
    error = state.get("error")

    if error:
        logger.error(f"Note pipeline failed: {error}", extra={"stats": stats})
        return state

    note = state.get("note")
    logger.info(
        f"Generated note '{note.title if note else ''}' from "
        f"{stats.get('total_chunks', 0)} chunks "
        f"({stats.get('duplicates_removed', 0)} duplicates removed)"
    )
    return state
