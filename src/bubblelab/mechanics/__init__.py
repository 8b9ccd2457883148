from bubblelab.mechanics.model import (
    BubblePair,
    FlowDirection,
    FlowStep,
    flow_direction,
    laplace_pressure,
    reset_pair,
    step,
)

__all__ = [
    "BubblePair",
    "FlowStep",
    "FlowDirection",
    "flow_direction",
    "laplace_pressure",
    "reset_pair",
    "step",
]
