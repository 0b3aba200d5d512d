"""Scene rendering orchestration.

Routes every arrow of a scene, generates labels through the configured text
shaper, and records per-arrow statistics. Arrows are independent: a failing
arrow is logged and skipped, the rest of the scene still renders.
"""

import asyncio
import time
import traceback
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from arrowroute.config import ArrowRouteSettings
from arrowroute.core.assembler import ArrowAssembler, ArrowGeometry
from arrowroute.core.label import LabelErr, LabelOk, LabelResult, TextShaper
from arrowroute.domain import ArrowComponent, Bounds
from arrowroute.io.scene import ArrowSpec, Scene
from arrowroute.io.text import FontTextShaper
from arrowroute.utils import RoutingLogger, RoutingStats


@dataclass
class RenderedArrow:
    """Result of rendering one scene arrow.

    Attributes:
        index: Position of the arrow in the scene
        geometry: Routed geometry (None if the arrow failed)
        components: Renderable components in paint order
        label: Outcome of the label step
        error: Error message if the arrow failed
    """

    index: int
    geometry: ArrowGeometry | None = None
    components: list[ArrowComponent] = field(default_factory=list)
    label: LabelResult | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class SceneRenderer:
    """Renders all arrows of a scene.

    Example:
        renderer = SceneRenderer(get_default_settings())
        arrows = renderer.render(scene)
        components = [c for arrow in arrows for c in arrow.components]
    """

    def __init__(
        self,
        settings: ArrowRouteSettings,
        routing_logger: RoutingLogger | None = None,
        shaper: TextShaper | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            settings: Application settings (label font is taken from here)
            routing_logger: Statistics logger; a fresh one is created if None
            shaper: Text shaper for labels; built from the configured font
                path if None, labels are skipped when neither is available
        """
        self.settings = settings
        self.logger = structlog.get_logger("arrowroute")
        self.routing_logger = routing_logger or RoutingLogger(self.logger)

        if shaper is None and settings.label_font.font_path is not None:
            shaper = FontTextShaper(settings.label_font.font_path)
        self.shaper = shaper

    @property
    def stats(self) -> RoutingStats:
        return self.routing_logger.stats

    def render(
        self,
        scene: Scene,
        progress_callback: Callable[[int, int, bool], None] | None = None,
    ) -> list[RenderedArrow]:
        """Render a scene synchronously.

        Args:
            scene: Scene to render
            progress_callback: Optional callback(completed, total, success)

        Returns:
            One RenderedArrow per scene arrow, in scene order
        """
        return asyncio.run(self.render_async(scene, progress_callback))

    async def render_async(
        self,
        scene: Scene,
        progress_callback: Callable[[int, int, bool], None] | None = None,
    ) -> list[RenderedArrow]:
        """Render a scene; label shaping is awaited per arrow."""
        stats = self.stats
        stats.start_time = time.time()

        obstacles = scene.obstacle_bounds()
        total = len(scene.arrows)
        self.logger.info("Rendering scene", arrows=total, obstacles=len(obstacles))

        results: list[RenderedArrow] = []
        for idx, spec in enumerate(scene.arrows):
            rendered = await self._render_arrow(idx, spec, scene, obstacles)
            results.append(rendered)
            if progress_callback:
                progress_callback(idx + 1, total, rendered.success)

        stats.end_time = time.time()
        self.logger.info(
            "Scene rendered",
            arrows=stats.arrows_routed,
            fallbacks=stats.fallbacks,
            labels=stats.labels_generated,
            errors=len(stats.errors),
            duration_seconds=round(stats.duration_seconds, 3),
        )
        return results

    async def _render_arrow(
        self,
        idx: int,
        spec: ArrowSpec,
        scene: Scene,
        obstacles: list[Bounds],
    ) -> RenderedArrow:
        start = spec.start.to_point()
        end = spec.end.to_point()
        assembler = ArrowAssembler(scene.config_for(spec))

        try:
            began = time.perf_counter()
            geometry = assembler.compute_geometry(start, end, obstacles)
            components = assembler.geometry_components(
                geometry, spec.stroke_color, spec.stroke_width
            )
            duration_ms = (time.perf_counter() - began) * 1000
        except Exception as e:
            self.routing_logger.log_arrow_error(idx, e, traceback.format_exc())
            return RenderedArrow(index=idx, error=str(e))

        self.routing_logger.log_arrow_routed(
            idx,
            geometry.strategy.value,
            len(geometry.points),
            geometry.fell_back,
            duration_ms,
        )

        label = await assembler.label(
            start,
            end,
            self.shaper,
            spec.stroke_color,
            spec.stroke_width,
            spec.fill_color,
            self.settings.label_font,
        )
        if isinstance(label, LabelOk):
            components.append(label.component)
            self.routing_logger.log_label(idx, "ok")
        elif isinstance(label, LabelErr):
            self.routing_logger.log_label(idx, "error", label.reason)
        else:
            self.routing_logger.log_label(idx, "skipped", label.reason)

        return RenderedArrow(index=idx, geometry=geometry, components=components, label=label)
