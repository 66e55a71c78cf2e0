"""
GeneratorConfig — validated, immutable puzzle-generator settings.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_NUM_NODES = 12


class GeneratorConfig(BaseModel):
    """
    Construction surface of the PuzzleGenerator.

    The inter-component connection range is the per-link default; the
    generator replaces it for some component counts (see
    ``INTER_CONNECTION_OVERRIDES``).
    """

    model_config = ConfigDict(frozen=True)

    num_nodes: int = Field(default=DEFAULT_NUM_NODES, gt=0)
    min_components: int = Field(default=3, ge=1)
    max_components: int = Field(default=4, ge=1)
    min_nodes_per_component: int = Field(default=3, gt=0)
    min_inter_component_connections: int = Field(default=1, ge=1)
    max_inter_component_connections: int = Field(default=2, ge=1)

    @model_validator(mode="after")
    def _check_ranges(self) -> "GeneratorConfig":
        if self.max_components < self.min_components:
            raise ValueError(
                f"max_components ({self.max_components}) must be >= "
                f"min_components ({self.min_components})"
            )
        if self.max_inter_component_connections < self.min_inter_component_connections:
            raise ValueError(
                f"max_inter_component_connections "
                f"({self.max_inter_component_connections}) must be >= "
                f"min_inter_component_connections "
                f"({self.min_inter_component_connections})"
            )
        return self

    @property
    def chunk_count(self) -> int:
        """Number of chunks the shuffled node list splits into."""
        return -(-self.num_nodes // self.min_nodes_per_component)
