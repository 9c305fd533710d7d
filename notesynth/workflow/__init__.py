from notesynth.workflow.workflow import (
    create_note_pipeline,
    generate_session_note,
    note_pipeline,
    run_note_pipeline,
)

__all__ = [
    "create_note_pipeline",
    "generate_session_note",
    "note_pipeline",
    "run_note_pipeline",
]
