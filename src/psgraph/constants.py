"""Fixed constants: paper sizes, layout defaults, nice-number tables.

All lengths are PostScript points (72 to the inch).
"""

# Paper sizes (width, height) in portrait orientation
PAPER_SIZES: dict[str, tuple[int, int]] = {
    'A3': (842, 1191),
    'A4': (595, 842),
    'A5': (420, 595),
    'Letter': (612, 792),
    'Legal': (612, 1008),
}
DEFAULT_PAPER = 'A4'
DEFAULT_PAGE_MARGIN = 36.0

# Chart-wide layout defaults
DEFAULT_TOP_MARGIN = 5.0  # room above the graph for the topmost y label
DEFAULT_RIGHT_MARGIN = 15.0  # room right of the graph for the last x label
DEFAULT_SPACING = 0.0
DEFAULT_DOTS_PER_INCH = 300.0
DEFAULT_KEY_WIDTH = 0.0

# Grid colours (0 = black, 1 = white) and line widths
DEFAULT_GRID_COLOR = 0.5
DEFAULT_BACKGROUND = 1.0
DEFAULT_HEAVY_WIDTH = 0.75
DEFAULT_MID_WIDTH = 0.5
DEFAULT_LIGHT_WIDTH = 0.25

# Fonts
DEFAULT_FONT = 'Helvetica'
DEFAULT_FONT_SIZE = 10.0
DEFAULT_FONT_COLOR = 0.0
DEFAULT_HEADING_FONT = 'Helvetica-Bold'
DEFAULT_HEADING_FONT_SIZE = 12.0

# Axis defaults
DEFAULT_AXIS_LOW = 0.0
DEFAULT_AXIS_HIGH = 100.0
DEFAULT_LABEL_GAP = 30.0  # physical space between the start of each label
DEFAULT_MARK_MIN = 0.5
DEFAULT_MARK_MAX = 8.0
DEFAULT_Y_AXIS_WIDTH = 30.0
SMALLEST_MARK_DOTS = 3  # minimum mark gap in device dots
CHAR_WIDTH_RATIO = 0.8  # average glyph width as a fraction of font size
HEADING_Y_TITLE_LINES = 1.5  # y axis title sits in the heading strip
X_AXIS_TEXT_LINES = 2.5  # labels plus title below an unrotated x axis

# Nice-number search: candidate multipliers and their natural subdivision
NICE_SCALES = (0.2, 0.5, 1.0, 2.0, 5.0)
NICE_SUBDIVISIONS = (2, 5, 2, 5, 2)

# PostScript flag bits for axis labels
FLAG_ROTATE = 1
FLAG_CENTER = 2

# Point shapes provided by the GraphStyle procset
POINT_SHAPES = ('dot', 'cross', 'square', 'plus', 'diamond', 'circle')

# Key defaults
DEFAULT_KEY_TITLE = 'Key'
DEFAULT_KEY_SPACING = 4.0
DEFAULT_KEY_OUTLINE_WIDTH = 0.75

# Chart builders
BAR_SLOT_MARGIN = 0.1  # fraction of a category slot left empty on each side
