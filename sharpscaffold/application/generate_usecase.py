"""
Generate Use Case - staged Reader -> Generator -> Writer pipeline.

Each stage runs its own pool of asyncio workers connected by unbounded
queues. Blocking work (file I/O, parsing, rendering) runs on a thread pool
so a slow read never stalls sibling workers. A stage closes its output
channel only after every one of its workers has drained its input.

On the first failure the reader stops taking new files; files already read
still flow through the remaining stages. Every recorded error is raised
together as a PipelineError once all stages have completed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from typing import Any, TypeVar

from ..adapters.io.file_store import SourceFileStore
from ..adapters.parsing.csharp_parser import CSharpParser
from ..adapters.rendering.csharp_renderer import CSharpRenderer
from ..config.models import PipelineConfig
from ..domain.models import GenerationReport, PipelineError, SourceFile, WriteError
from ..ports.parser_port import ParserPort
from ..ports.renderer_port import RendererPort
from ..ports.writer_port import WriterPort
from .generation.services.unit_synthesizer import TestUnitSynthesizer

logger = logging.getLogger(__name__)

T = TypeVar("T")

# End-of-stream marker. Workers that see it put it back for their siblings.
_CLOSED = object()


@dataclass
class _RunState:
    """Mutable bookkeeping shared by the workers of one run."""

    abort: asyncio.Event = field(default_factory=asyncio.Event)
    errors: list[Exception] = field(default_factory=list)
    files_read: int = 0
    units_generated: int = 0
    written_files: list[str] = field(default_factory=list)
    written_names: dict[str, str] = field(default_factory=dict)

    def fail(self, error: Exception) -> None:
        self.errors.append(error)
        self.abort.set()


@dataclass(frozen=True)
class _SourceText:
    path: str
    text: str


@dataclass(frozen=True)
class _UnitText:
    origin: str
    class_name: str
    text: str


class TestsGenerator:
    """
    Pipeline orchestrator generating one test scaffold per C# class.

    Usage::

        report = await TestsGenerator(config).generate()
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        config: PipelineConfig,
        parser: ParserPort | None = None,
        renderer: RendererPort | None = None,
        store: WriterPort | None = None,
        synthesizer: TestUnitSynthesizer | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            config: Frozen run configuration
            parser: Parser port (defaults to the tree-sitter C# parser)
            renderer: Renderer port (defaults to the C# renderer)
            store: Reader/writer port (defaults to a filesystem store honoring dry-run)
            synthesizer: Unit synthesizer
            executor: Thread pool for blocking work; one sized to the stage
                limits is created per run when omitted
        """
        self._config = config
        self._parser = parser or CSharpParser()
        self._renderer = renderer or CSharpRenderer()
        self._store = store or SourceFileStore(dry_run=config.dry_run)
        self._synthesizer = synthesizer or TestUnitSynthesizer()
        self._executor = executor

    async def generate(self) -> GenerationReport:
        """
        Run the pipeline to completion.

        Returns:
            GenerationReport describing what was read, generated and written

        Raises:
            PipelineError: If any item failed in any stage
        """
        if self._executor is not None:
            return await self._run(self._executor)

        workers = (
            self._config.max_files_reading_parallel
            + self._config.max_test_classes_generating_parallel
            + self._config.max_files_writing_parallel
        )
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="sharpscaffold"
        ) as executor:
            return await self._run(executor)

    async def _run(self, executor: ThreadPoolExecutor) -> GenerationReport:
        loop = asyncio.get_running_loop()

        async def blocking(fn: Callable[..., T], *args: Any) -> T:
            return await loop.run_in_executor(executor, partial(fn, *args))

        state = _RunState()
        try:
            await blocking(self._store.ensure_directory, self._config.save_path)
        except WriteError as e:
            raise PipelineError([e]) from e

        paths: asyncio.Queue = asyncio.Queue()
        texts: asyncio.Queue = asyncio.Queue()
        units: asyncio.Queue = asyncio.Queue()
        for path in self._config.files_paths:
            paths.put_nowait(path)
        paths.put_nowait(_CLOSED)

        logger.debug(
            "Starting pipeline for %d file(s) (read=%d, generate=%d, write=%d)",
            len(self._config.files_paths),
            self._config.max_files_reading_parallel,
            self._config.max_test_classes_generating_parallel,
            self._config.max_files_writing_parallel,
        )

        await asyncio.gather(
            self._stage(
                "read",
                self._config.max_files_reading_parallel,
                paths,
                texts,
                partial(self._read, blocking, state),
                state,
                skip_after_failure=True,
            ),
            self._stage(
                "generate",
                self._config.max_test_classes_generating_parallel,
                texts,
                units,
                partial(self._generate, blocking, state),
                state,
            ),
            self._stage(
                "write",
                self._config.max_files_writing_parallel,
                units,
                None,
                partial(self._write, blocking, state),
                state,
            ),
        )

        if state.errors:
            logger.error("Generation failed with %d error(s)", len(state.errors))
            raise PipelineError(state.errors)

        report = GenerationReport(
            files_read=state.files_read,
            units_generated=state.units_generated,
            written_files=state.written_files,
            dry_run=self._config.dry_run,
        )
        logger.info(
            "Generated %d test class(es) from %d file(s)",
            report.units_generated,
            report.files_read,
        )
        return report

    # ------------------------------------------------------------------
    # Stage plumbing
    # ------------------------------------------------------------------

    async def _stage(
        self,
        name: str,
        parallelism: int,
        inbox: asyncio.Queue,
        outbox: asyncio.Queue | None,
        handler: Callable[[Any, asyncio.Queue | None], Awaitable[None]],
        state: _RunState,
        skip_after_failure: bool = False,
    ) -> None:
        """Run ``parallelism`` workers over ``inbox`` and close ``outbox`` afterwards."""

        async def worker(index: int) -> None:
            while True:
                item = await inbox.get()
                if item is _CLOSED:
                    inbox.put_nowait(_CLOSED)
                    return
                if skip_after_failure and state.abort.is_set():
                    logger.debug("[%s-%d] skipping %r after failure", name, index, item)
                    continue
                try:
                    await handler(item, outbox)
                except Exception as e:
                    logger.error("[%s-%d] %s", name, index, e)
                    state.fail(e)

        await asyncio.gather(*(worker(i) for i in range(parallelism)))
        if outbox is not None:
            outbox.put_nowait(_CLOSED)
        logger.debug("Stage %s completed", name)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _read(self, blocking, state: _RunState, path: str, outbox: asyncio.Queue) -> None:
        text = await blocking(self._store.read_text, path)
        state.files_read += 1
        logger.debug("Read %s (%d chars)", path, len(text))
        outbox.put_nowait(_SourceText(path=path, text=text))

    async def _generate(
        self, blocking, state: _RunState, source: _SourceText, outbox: asyncio.Queue
    ) -> None:
        source_file = await blocking(self._parser.parse, source.text, source.path)
        async for unit in self._units(blocking, source.path, source_file):
            state.units_generated += 1
            outbox.put_nowait(unit)

    async def _units(
        self, blocking, path: str, source_file: SourceFile
    ) -> AsyncIterator[_UnitText]:
        """Yield one rendered unit per class, each as soon as it is ready."""
        for unit in self._synthesizer.synthesize_file(source_file):
            text = await blocking(self._renderer.render, unit)
            yield _UnitText(origin=path, class_name=unit.class_name, text=text)

    async def _write(self, blocking, state: _RunState, unit: _UnitText, _outbox) -> None:
        name = await blocking(self._parser.first_class_name, unit.text)
        target = self._config.output_path_for(name)

        previous = state.written_names.get(name)
        if previous is not None:
            message = (
                f"{target} generated from both {previous} and {unit.origin}"
            )
            if self._config.collision_policy == "error":
                raise WriteError(f"Output collision: {message}", path=str(target))
            logger.warning("Overwriting %s", message)
        state.written_names[name] = unit.origin

        written = await blocking(self._store.write_text, target, unit.text)
        if str(written) not in state.written_files:
            state.written_files.append(str(written))
        logger.debug("Wrote %s (%s)", written, unit.class_name)
