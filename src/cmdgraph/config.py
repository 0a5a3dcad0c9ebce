import os

from pydantic import BaseModel, Field

logging_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s",
        },
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "cmdgraph": {"level": "DEBUG", "handlers": ["default"], "propagate": False},
        "distributed": {"level": "WARNING", "handlers": ["default"], "propagate": False},
    },
    "root": {"level": "WARNING", "handlers": ["default"]},
}


class BackendConfig(BaseModel):
    max_workers: int | None = Field(
        None,
        description="size of the thread pool, None lets concurrent.futures decide",
    )
    thread_name_prefix: str = Field("cmdgraph", description="prefix of the pool threads' names")
    dask_address: str | None = Field(
        None,
        description="scheduler address for DaskBackend. If None, a local in-process cluster is started",
    )

    @classmethod
    def from_env(cls) -> "BackendConfig":
        values: dict[str, str] = {}
        if max_workers := os.environ.get("CMDGRAPH_MAX_WORKERS", ""):
            values["max_workers"] = max_workers
        if prefix := os.environ.get("CMDGRAPH_THREAD_PREFIX", ""):
            values["thread_name_prefix"] = prefix
        if address := os.environ.get("CMDGRAPH_DASK_ADDRESS", ""):
            values["dask_address"] = address
        return cls.model_validate(values)
