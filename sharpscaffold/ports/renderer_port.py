from abc import abstractmethod
from typing import Protocol

from ..domain.models import SynthesizedUnit


class RendererPort(Protocol):
    """Port interface for rendering a synthesized unit back to source text."""

    @abstractmethod
    def render(self, unit: SynthesizedUnit) -> str:
        """
        Render a unit as formatted source text.

        Rendering must be deterministic: the same unit always yields the
        same text.

        Raises:
            RenderError: If the unit cannot be rendered
        """
        ...
