"""Base class for all pipeline steps.

Every step declares typed Input, Output, Config via Pydantic models.
This lets the pipeline runner chain step outputs into the next step's
input and lets the CLI print each step's JSON Schema.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses must:
    1. Define concrete Pydantic models for InputT, OutputT, ConfigT
    2. Set class variables: input_type, output_type, config_type
    3. Implement run() and validate_inputs()

    ``data_root`` is the folder the batch was started on: archives are read
    from it, working folders and videos are written into it.

    Example:
        class EstimateFpsStep(BaseStep[EstimateFpsInput, EstimateFpsOutput, EstimateFpsConfig]):
            input_type = EstimateFpsInput
            output_type = EstimateFpsOutput
            config_type = EstimateFpsConfig

            def run(self, inputs: EstimateFpsInput) -> EstimateFpsOutput: ...
            def validate_inputs(self, inputs: EstimateFpsInput) -> bool: ...
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this pipeline step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that all required input artifacts exist and are valid."""
        ...

    def log_prefix(self, inputs: InputT) -> str:
        """``[archive:step]`` for per-archive inputs, ``[step]`` otherwise."""
        step_name = self.name or self.__class__.__name__
        archive = getattr(inputs, "archive", None)
        if archive is None:
            return f"[{step_name}]"
        return f"[{archive.base_name}:{step_name}]"

    def execute(self, inputs: InputT) -> OutputT:
        """Run with logging, timing, and validation."""
        prefix = self.log_prefix(inputs)
        logger.info(f"{prefix} Validating inputs...")

        if not self.validate_inputs(inputs):
            raise ValueError(f"{prefix} Input validation failed")

        logger.info(f"{prefix} Starting...")
        t0 = time.perf_counter()
        result = self.run(inputs)
        elapsed = time.perf_counter() - t0
        logger.info(f"{prefix} Done in {elapsed:.2f}s")
        return result

    @classmethod
    def get_input_schema(cls) -> dict:
        """Return JSON schema for inputs."""
        return cls.input_type.model_json_schema()

    @classmethod
    def get_output_schema(cls) -> dict:
        """Return JSON schema for outputs."""
        return cls.output_type.model_json_schema()

    @classmethod
    def get_config_schema(cls) -> dict:
        """Return JSON schema for config."""
        return cls.config_type.model_json_schema()
