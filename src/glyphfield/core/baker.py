"""Parallel baking of glyph distance fields.

This module coordinates the font-to-bitmaps workflow with parallel
generation of individual glyphs using ProcessPoolExecutor.

Key components:
- bake_glyph: Top-level picklable function for parallel execution
- GlyphBaker: Main orchestrator class for baking a font
"""

import time
import traceback
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from glyphfield.config import GlyphConfig, GlyphfieldSettings
from glyphfield.core.generator import generate_msdf_for_glyph
from glyphfield.domain import MsdfResult, Shape, Vertex
from glyphfield.exceptions import FontLoadError, GlyphfieldError
from glyphfield.io import BitmapWriter, FontReader
from glyphfield.utils import BakeLogger, BakeStats, configure_worker_logging

ProgressCallback = Callable[[int, int, str, bool], None]


def bake_glyph(
    glyph_name: str,
    vertex_dicts: list[dict[str, Any]],
    config_dict: dict[str, Any],
    strict: bool = False,
) -> dict[str, Any]:
    """Generate the distance field of a single glyph.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the vertex stream, builds and rasterizes the shape, and
    returns the bitmap.

    Args:
        glyph_name: Name of the glyph (for reporting)
        vertex_dicts: Serialized vertices (from Vertex.to_dict())
        config_dict: Serialized glyph configuration (GlyphConfig.model_dump())
        strict: Fail on unrecognized vertex commands

    Returns:
        Dictionary containing either:
        - Success: {"glyph_name", "result": MsdfResult dict, "contours",
          "edges", "closed", "duration_ms"}
        - Error: {"error": str, "glyph_name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        config = GlyphConfig(**config_dict)
        vertices = [Vertex.from_dict(data) for data in vertex_dicts]

        shape = Shape.from_vertices(vertices, flip_y=config.flip_y, strict=strict)

        result = generate_msdf_for_glyph(
            shape,
            output_size=config.output_size,
            padding=config.padding,
            range_=config.range,
            angle_threshold=config.angle_threshold,
        )

        duration_ms = (time.time() - start_time) * 1000
        return {
            "glyph_name": glyph_name,
            "result": result.to_dict(),
            "contours": len(shape.contours),
            "edges": shape.edge_count,
            "closed": shape.validate(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "glyph_name": glyph_name,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class BakeTask:
    """One glyph selected for baking."""

    glyph_name: str
    codepoint: int | None
    vertices: list[dict[str, Any]]


class GlyphBaker:
    """Orchestrates parallel MSDF baking of a font.

    Manages the complete workflow:
    1. Load font file
    2. Select glyphs (given characters, or every encoded glyph)
    3. Generate bitmaps inline or in worker processes
    4. Write each bitmap as it completes and update statistics

    Example:
        settings = GlyphfieldSettings()
        baker = GlyphBaker(settings)
        stats = baker.bake(
            font_path=Path("font.ttf"),
            chars="ABC",
            max_workers=4,
        )
    """

    def __init__(
        self,
        settings: GlyphfieldSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the baker.

        Args:
            settings: Glyphfield settings
            logger: Logger to report to (module logger if None)
        """
        self.settings = settings
        self.logger = logger if logger is not None else structlog.get_logger(__name__)
        self.bake_logger = BakeLogger(self.logger)

    @property
    def stats(self) -> BakeStats:
        """Statistics of the current or last bake, including interrupted ones."""
        return self.bake_logger.stats

    def bake(
        self,
        font_path: Path,
        chars: str | None = None,
        output_dir: Path | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BakeStats:
        """Bake distance fields for glyphs of a font.

        Args:
            font_path: Path to input font file (TTF or OTF)
            chars: Characters to bake (None = every encoded glyph)
            output_dir: Directory for bitmaps (config default if None)
            max_workers: Maximum worker processes (None = config, 1 = inline)
            progress_callback: Optional callback(completed, total, glyph_name, success)
                for progress updates

        Returns:
            BakeStats with counts, timing, and error details

        Raises:
            FontLoadError: If the font cannot be opened
            KeyboardInterrupt: If baking is cancelled by user
        """
        self.bake_logger = BakeLogger(self.logger)
        stats = self.bake_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.settings.processing.max_workers
        if output_dir is None:
            output_dir = self.settings.output.output_dir

        writer = BitmapWriter(output_dir, self.settings.output.image_format)

        self.logger.info(
            "Starting bake",
            input=str(font_path),
            output_dir=str(output_dir),
            max_workers=max_workers,
        )

        reader = FontReader(font_path)
        try:
            reader.load()
        except Exception as e:
            raise FontLoadError(str(font_path), str(e)) from e

        try:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )
            tasks = self.collect_tasks(reader, chars)
        finally:
            reader.close()

        self.logger.info(
            "Selected glyphs",
            to_bake=len(tasks),
            skipped=stats.skipped_count,
        )

        if not tasks:
            self.logger.info("No glyphs to bake")
        elif max_workers == 1:
            self._bake_inline(tasks, writer, progress_callback)
        else:
            self._bake_parallel(tasks, writer, max_workers, progress_callback)

        stats.end_time = time.time()

        self.logger.info(
            "Bake complete",
            baked=stats.baked_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def collect_tasks(self, reader: FontReader, chars: str | None = None) -> list[BakeTask]:
        """Select the glyphs to bake from a loaded font.

        Each glyph is baked once even if several characters map to it.
        Characters the font does not map, and empty outlines when
        skip_empty is set, are counted as skipped.

        Args:
            reader: Loaded font reader
            chars: Characters to select (None = every encoded glyph)

        Returns:
            Tasks in character order
        """
        if chars is None:
            candidates: Iterable[tuple[int, str | None]] = reader.iter_encoded_glyphs()
        else:
            candidates = [
                (ord(char), reader.glyph_name_for_char(char))
                for char in dict.fromkeys(chars)
            ]

        tasks: list[BakeTask] = []
        seen: set[str] = set()

        for codepoint, glyph_name in candidates:
            if glyph_name is None:
                self.bake_logger.log_glyph_skipped(f"U+{codepoint:04X}", "not in character map")
                continue
            if glyph_name in seen:
                continue
            seen.add(glyph_name)

            vertices = reader.get_vertices(glyph_name)
            if not vertices and self.settings.processing.skip_empty:
                self.bake_logger.log_glyph_skipped(glyph_name, "empty glyph")
                continue

            tasks.append(
                BakeTask(
                    glyph_name=glyph_name,
                    codepoint=codepoint,
                    vertices=[vertex.to_dict() for vertex in vertices],
                )
            )

        return tasks

    def _bake_inline(
        self,
        tasks: list[BakeTask],
        writer: BitmapWriter,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        config_dict = self.settings.glyph.model_dump()
        strict = self.settings.processing.strict_vertices
        total = len(tasks)

        for completed, task in enumerate(tasks, start=1):
            self.bake_logger.log_glyph_start(task.glyph_name)
            result = bake_glyph(task.glyph_name, task.vertices, config_dict, strict)
            success = self._handle_result(task, result, writer)
            if progress_callback is not None:
                progress_callback(completed, total, task.glyph_name, success)

    def _bake_parallel(
        self,
        tasks: list[BakeTask],
        writer: BitmapWriter,
        max_workers: int | None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Bake glyphs in parallel using ProcessPoolExecutor.

        Args:
            tasks: Glyphs to bake
            writer: Writer receiving finished bitmaps
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, glyph_name, success)
                for progress updates
        """
        stats = self.bake_logger.stats

        # Serialize configuration for workers
        config_dict = self.settings.glyph.model_dump()
        strict = self.settings.processing.strict_vertices

        self.logger.info(
            "Starting parallel baking",
            glyph_count=len(tasks),
            max_workers=max_workers,
        )

        total = len(tasks)
        completed = 0
        pending_futures: dict[Future[dict[str, Any]], BakeTask] = {}

        with ProcessPoolExecutor(
            max_workers=max_workers,
            initializer=configure_worker_logging,
            initargs=(self.settings.logging.log_level,),
        ) as executor:
            for task in tasks:
                future = executor.submit(
                    bake_glyph,
                    task.glyph_name,
                    task.vertices,
                    config_dict,
                    strict,
                )
                pending_futures[future] = task

            try:
                for future in as_completed(list(pending_futures)):
                    task = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._handle_result(task, future.result(), writer)
                    except Exception as e:
                        # Executor-level error
                        self.bake_logger.log_glyph_error(
                            glyph_name=task.glyph_name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, task.glyph_name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for pending in pending_futures:
                    pending.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                stats.end_time = time.time()

                executor.shutdown(wait=True, cancel_futures=True)
                raise

    def _handle_result(
        self,
        task: BakeTask,
        result: dict[str, Any],
        writer: BitmapWriter,
    ) -> bool:
        """Record a worker result and write its bitmap.

        Returns:
            True if the bitmap was generated and written
        """
        if "error" in result:
            self.bake_logger.log_glyph_error(
                glyph_name=result["glyph_name"],
                error=GlyphfieldError(result["error"]),
                traceback=result.get("traceback"),
            )
            return False

        self.bake_logger.log_shape_summary(
            task.glyph_name,
            contours=result["contours"],
            edges=result["edges"],
            closed=result["closed"],
        )

        with MsdfResult.from_dict(result["result"]) as msdf:
            try:
                path = writer.write(msdf, task.glyph_name, task.codepoint)
            except GlyphfieldError as e:
                self.bake_logger.log_glyph_error(task.glyph_name, e)
                return False

        self.logger.debug("Bitmap written", glyph=task.glyph_name, path=str(path))
        self.bake_logger.log_glyph_complete(
            task.glyph_name,
            edges=result["edges"],
            duration_ms=result.get("duration_ms", 0.0),
        )
        return True
