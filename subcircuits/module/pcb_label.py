"""
PCB label — the cosmetic board text printed on the module.

The board type is drawn from a default pool plus types unlocked by the
bomb's edgework.
"""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, Field

from subcircuits.core.random_source import RandomSource

MODULE_VERSION = 1

PCB_TYPES_DEFAULT: tuple[str, ...] = ("STK", "TMR", "PCG", "ZKZ")


class Edgework(BaseModel):
    """Bomb facts the label depends on."""

    two_factor_count: int = Field(default=0, ge=0)
    ports: dict[str, int] = Field(default_factory=dict, description="Port name -> count")
    battery_count: int = Field(default=0, ge=0)
    indicators: list[str] = Field(default_factory=list)

    def port_count(self, *names: str) -> int:
        return sum(self.ports.get(name, 0) for name in names)


PCB_TYPES_DEPENDENT: tuple[tuple[str, Callable[[Edgework], bool]], ...] = (
    ("2FA", lambda info: info.two_factor_count > 0),
    ("DSP", lambda info: info.port_count("DVI") > 0),
    ("AUD", lambda info: info.port_count("StereoRCA") > 0),
    ("NET", lambda info: info.port_count("RJ45") > 0),
    ("COM", lambda info: info.port_count("Parallel", "Serial") > 0),
    ("PER", lambda info: info.port_count("PS2") > 0),
    ("BTY", lambda info: info.battery_count > 0),
    ("IND", lambda info: len(info.indicators) > 0),
    ("BOB", lambda info: "BOB" in info.indicators),
)


def available_pcb_types(edgework: Edgework) -> list[str]:
    """Default types followed by every type the edgework unlocks."""
    return list(PCB_TYPES_DEFAULT) + [
        name for name, applies in PCB_TYPES_DEPENDENT if applies(edgework)
    ]


def generate_pcb_label(
    rng: RandomSource, module_id: int, edgework: Edgework | None = None
) -> str:
    """
    Build the three-line label, e.g.::

        KTANE_STK_01
        MODEL# SS0001
        1A2B-3C4D-5E6F
    """
    pcb_type = rng.choice(available_pcb_types(edgework or Edgework()))
    ids = [rng.randint(0, 65536) for _ in range(3)]
    return (
        f"KTANE_{pcb_type}_{MODULE_VERSION:02d}\n"
        f"MODEL# SS{module_id:04d}\n"
        + "-".join(f"{i:04X}" for i in ids)
    )
