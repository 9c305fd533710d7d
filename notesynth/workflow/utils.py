from typing import Any

from langchain_core.runnables import RunnableConfig

from notesynth.orchestrator.config import PipelineConfig, RetryConfig


def get_runtime(config: RunnableConfig | None, key: str, default: Any = None) -> Any:
    """Read an injected dependency (providers, settings) from the run config."""
    if not config:
        return default
    return config.get("configurable", {}).get(key, default)


def get_settings(config: RunnableConfig | None) -> PipelineConfig:
    return get_runtime(config, "settings") or PipelineConfig()


def get_retry_settings(config: RunnableConfig | None) -> RetryConfig:
    return get_runtime(config, "retry") or RetryConfig()


def fail(state: dict, error: BaseException) -> dict:
    """Record an error on the state; routing sends the run to ``finalize``."""
    return {**state, "error": str(error), "exception": error}
