"""Graph paper layout: axis scales, coordinate transforms and chart areas."""

from psgraph.layout.engine import AxisLayout, Box, ChartArea, LayoutEngine
from psgraph.layout.scale import ResolvedScale, calculate_scale, categorical_scale
from psgraph.layout.transform import CoordinateTransform

__all__: list[str] = [
    'AxisLayout',
    'Box',
    'ChartArea',
    'CoordinateTransform',
    'LayoutEngine',
    'ResolvedScale',
    'calculate_scale',
    'categorical_scale',
]
