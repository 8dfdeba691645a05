"""Main sharpscaffold configuration model."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from .discovery import DiscoveryConfig
from .pipeline import ConcurrencyConfig, OutputConfig, PipelineConfig
from .logging_config import LoggingConfig


class SharpScaffoldConfig(BaseModel):
    """Main configuration model for sharpscaffold."""

    pipeline: ConcurrencyConfig = Field(
        default_factory=ConcurrencyConfig, description="Per-stage worker limits"
    )

    output: OutputConfig = Field(
        default_factory=OutputConfig, description="Generated file placement"
    )

    discovery: DiscoveryConfig = Field(
        default_factory=DiscoveryConfig, description="Directory expansion rules"
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging behavior configuration"
    )

    def build_pipeline_config(
        self,
        files_paths: Iterable[str],
        save_path: str | None = None,
        dry_run: bool = False,
    ) -> PipelineConfig:
        """Freeze this configuration plus the run's inputs into a PipelineConfig."""
        return PipelineConfig(
            max_files_reading_parallel=self.pipeline.max_files_reading_parallel,
            max_files_writing_parallel=self.pipeline.max_files_writing_parallel,
            max_test_classes_generating_parallel=self.pipeline.max_test_classes_generating_parallel,
            files_paths=tuple(files_paths),
            save_path=save_path or self.output.save_path,
            file_extension=self.output.file_extension,
            collision_policy=self.output.collision_policy,
            dry_run=dry_run,
        )
