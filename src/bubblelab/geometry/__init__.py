from bubblelab.geometry.steiner import (
    Mode,
    Orientation,
    SteinerLayout,
    compute_layout,
    junction_angles,
    length_saving,
    network_length,
)

__all__ = [
    "Mode",
    "Orientation",
    "SteinerLayout",
    "compute_layout",
    "junction_angles",
    "length_saving",
    "network_length",
]
