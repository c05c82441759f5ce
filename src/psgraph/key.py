"""Chart key: a titled box listing an icon and label for each data series."""

from __future__ import annotations

import logging
import math

from psgraph.colors import Color, check_color
from psgraph.constants import (
    DEFAULT_FONT,
    DEFAULT_FONT_SIZE,
    DEFAULT_HEADING_FONT,
    DEFAULT_HEADING_FONT_SIZE,
    DEFAULT_KEY_OUTLINE_WIDTH,
    DEFAULT_KEY_SPACING,
    DEFAULT_KEY_TITLE,
)
from psgraph.errors import ConfigurationError, ResourceError
from psgraph.layout.engine import Box
from psgraph.params import check_text
from psgraph.rendering import procsets
from psgraph.rendering.builder import PostScriptBuilder, PSName
from psgraph.rendering.paper import GraphPaper

logger = logging.getLogger(__name__)


class GraphKey:
    """Key box laid out in rows and columns to fit a maximum height.

    Create the key before the graph paper so its width can be reserved
    (layout key_width), then call build_key() with the paper and
    add_key_item() once per series.

    Parameters:
        max_height: Vertical space available for the key box.
        num_items: Number of items that will be added.
        title: Heading at the top of the box.
        title_font, title_size, title_color: Heading text settings.
        text_font, text_size, text_color: Item label settings.
        text_width: Room for each label (default: four times text_size).
        background: Fill colour of the box.
        outline_color, outline_width: Box outline.
        spacing: Gap between edges, icons and text.
        vertical_spacing: Gap between rows (default: spacing).
        horizontal_spacing: Gap between icon and text (default: 2 * spacing).
        icon_width, icon_height: Room for each icon (default: text_size).
        paper: GraphPaper providing the key area; may be given to build_key.

    Raises:
        ConfigurationError: Bad sizes, or max_height too small for one row.
    """

    def __init__(
        self,
        max_height: float,
        num_items: int,
        title: str = DEFAULT_KEY_TITLE,
        title_font: str = DEFAULT_HEADING_FONT,
        title_size: float = DEFAULT_HEADING_FONT_SIZE,
        title_color: Color = 0.0,
        text_font: str = DEFAULT_FONT,
        text_size: float = DEFAULT_FONT_SIZE,
        text_color: Color = 0.0,
        text_width: float | None = None,
        background: Color = 1.0,
        outline_color: Color = 0.0,
        outline_width: float = DEFAULT_KEY_OUTLINE_WIDTH,
        spacing: float = DEFAULT_KEY_SPACING,
        vertical_spacing: float | None = None,
        horizontal_spacing: float | None = None,
        icon_width: float | None = None,
        icon_height: float | None = None,
        paper: GraphPaper | None = None,
    ) -> None:
        if num_items < 1:
            raise ConfigurationError(f'key: num_items must be at least 1, got {num_items}')
        if title_size <= 0 or text_size <= 0:
            raise ConfigurationError('key: font sizes must be positive')
        if spacing < 0 or outline_width < 0:
            raise ConfigurationError('key: spacing and outline_width must not be negative')
        self.title = check_text(title, 'key.title')
        self.title_font = check_text(title_font, 'key.title_font')
        self.title_size = title_size
        self.title_color = check_color(title_color, 'key.title_color')
        self.text_font = check_text(text_font, 'key.text_font')
        self.text_size = text_size
        self.text_color = check_color(text_color, 'key.text_color')
        self.text_width = text_size * 4 if text_width is None else text_width
        self.background = check_color(background, 'key.background')
        self.outline_color = check_color(outline_color, 'key.outline_color')
        self.outline_width = outline_width
        self.vertical_spacing = spacing if vertical_spacing is None else vertical_spacing
        self.horizontal_spacing = spacing * 2 if horizontal_spacing is None else horizontal_spacing
        self.icon_width = text_size if icon_width is None else icon_width
        self.icon_height = max(text_size if icon_height is None else icon_height, text_size)
        self.num_items = num_items

        vspc, hspc = self.vertical_spacing, self.horizontal_spacing
        self.item_width = hspc + self.icon_width + hspc + self.text_width + hspc
        self.item_height = vspc + self.icon_height
        self.top_margin = text_size * 2 + vspc
        margins = self.top_margin + 2 * vspc
        available = max_height - margins
        if num_items * self.item_height <= available:
            self.rows = num_items
            self.columns = 1
        else:
            self.rows = int(available / self.item_height)
            if self.rows < 1:
                raise ConfigurationError(
                    f'key: max_height {max_height:g} leaves no room for a row of height '
                    f'{self.item_height:g}'
                )
            self.columns = math.ceil(num_items / self.rows)
        self.height = margins + self.rows * self.item_height
        self.width = hspc + self.columns * self.item_width
        self._paper = paper
        self._box: Box | None = None
        self._current = 0

    @property
    def box(self) -> Box | None:
        """Key rectangle once build_key has placed it."""
        return self._box

    def _require_paper(self) -> GraphPaper:
        if self._paper is None:
            raise ResourceError('GraphKey has no GraphPaper; pass one to build_key()')
        return self._paper

    def build_key(self, paper: GraphPaper | None = None) -> None:
        """Centre the key box vertically in the paper's key area and draw its outline and title.

        Raises:
            ResourceError: No GraphPaper given here or to the constructor.
        """
        if paper is not None:
            self._paper = paper
        paper = self._require_paper()
        document = paper.document
        kx0, ky0, kx1, ky1 = paper.key_area()
        offset = (ky1 - ky0 - self.height) / 2
        ky0 += offset
        ky1 = ky0 + self.height
        self._box = Box(kx0, ky0, kx1, ky1)

        b = PostScriptBuilder()
        b.begin('graphkeydict')
        b.define('kx0', kx0)
        b.define('ky0', ky0)
        b.define('kx1', kx1)
        b.define('ky1', ky1)
        b.define('kvspc', self.vertical_spacing)
        b.define('khspc', self.horizontal_spacing)
        b.define('kdxicon', self.icon_width)
        b.define('kdyicon', self.icon_height)
        b.define('kdxtext', self.text_width)
        b.define('kdytext', self.text_size)
        b.define('kfont', PSName(self.text_font))
        b.define('ksize', self.text_size)
        b.define('kcol', self.text_color)
        b.call(
            'keybox',
            self.title,
            PSName(self.title_font),
            self.title_size,
            self.title_color,
            self.outline_width,
            self.outline_color,
            self.background,
        )
        b.end()
        procsets.install(document, procsets.GRAPH_KEY)
        document.add_to_page(b.text())
        logger.debug('Key %s: %d rows x %d columns', tuple(self._box), self.rows, self.columns)

    def add_key_item(self, label: str, code: str = '') -> None:
        """Add the next item: icon drawn by code, then label.

        code runs inside graphkeydict with the icon area in kix0, kiy0,
        kix1, kiy1.

        Raises:
            ResourceError: build_key has not been called.
            ConfigurationError: More items than num_items.
        """
        document = self._require_paper().document
        check_text(label, 'key item label')
        if self._box is None:
            raise ResourceError('build_key() must be called before add_key_item()')
        if self._current >= self.num_items:
            raise ConfigurationError(f'key: already holds all {self.num_items} items')
        n = self._current
        self._current += 1
        col = n // self.rows
        row = n - col * self.rows
        kdx = col * self.item_width
        kdy = self.height - self.top_margin - (row + 1) * self.item_height

        b = PostScriptBuilder()
        b.begin('graphkeydict')
        b.define('kdx', kdx)
        b.define('kdy', kdy)
        b.raw('newpath')
        b.raw('movetoicon')
        b.extend(line.strip() for line in code.splitlines() if line.strip())
        b.raw('stroke')
        b.raw('movetotext')
        b.call('show', label)
        b.end()
        document.add_to_page(b.text())
