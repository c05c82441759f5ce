"""PostScript chart generation: graph paper layout, styles, keys and charts.

This package provides:
- A layout engine that picks "nice" axis scales, nested mark subdivisions and
  label placement for a page area, with logical/physical coordinate mapping
- A PostScript document sink with reusable procedure sets
- Line, bar and point styles cycled through an explicit sequence
- Bar and XY chart builders reading delimited data
"""

from psgraph.charts import BarChart, DataTable, XYChart, read_csv
from psgraph.errors import ConfigurationError, DataShapeError, ResourceError
from psgraph.key import GraphKey
from psgraph.layout.engine import LayoutEngine
from psgraph.params import AxisSpec, ChartOptions, PageLayout
from psgraph.rendering.document import PostScriptDocument
from psgraph.rendering.paper import GraphPaper
from psgraph.style import Sequence, Style

__all__: list[str] = [
    'AxisSpec',
    'BarChart',
    'ChartOptions',
    'ConfigurationError',
    'DataShapeError',
    'DataTable',
    'GraphKey',
    'GraphPaper',
    'LayoutEngine',
    'PageLayout',
    'PostScriptDocument',
    'ResourceError',
    'Sequence',
    'Style',
    'XYChart',
    'read_csv',
]
