"""PostScript document: paper setup, named procedure sets and page bodies.

Procedure sets are written once each into the prolog; pages hold the
statements added by charts. Output follows the Document Structuring
Conventions so viewers can find pages and resources.
"""

from __future__ import annotations

import io
import logging
import textwrap
from pathlib import Path
from typing import TextIO

from psgraph.config import get_paper_name
from psgraph.constants import DEFAULT_PAGE_MARGIN, PAPER_SIZES
from psgraph.errors import ConfigurationError
from psgraph.rendering.builder import ps_number

logger = logging.getLogger(__name__)


class PostScriptDocument:
    """In-memory PostScript document with a prolog of procedure sets.

    Parameters:
        paper: Paper name from PAPER_SIZES (default: PSGRAPH_PAPER or A4).
        landscape: Rotate the drawing coordinates by 90 degrees.
        left, right, top, bottom: Margins in points, relative to the
            drawing orientation.
        title: %%Title comment.
        creator: %%Creator comment.

    Raises:
        ConfigurationError: Unknown paper name, margins leave no page, or a
            title or creator outside Latin-1.
    """

    def __init__(
        self,
        paper: str | None = None,
        landscape: bool = False,
        left: float = DEFAULT_PAGE_MARGIN,
        right: float = DEFAULT_PAGE_MARGIN,
        top: float = DEFAULT_PAGE_MARGIN,
        bottom: float = DEFAULT_PAGE_MARGIN,
        title: str = '',
        creator: str = 'psgraph',
    ) -> None:
        name = get_paper_name() if paper is None else paper
        size = None
        for known, dims in PAPER_SIZES.items():
            if known.lower() == name.lower():
                name, size = known, dims
                break
        if size is None:
            raise ConfigurationError(
                f'Unknown paper {name!r}; expected one of {", ".join(PAPER_SIZES)}'
            )
        for field, text in (('title', title), ('creator', creator)):
            try:
                text.encode('latin-1')
            except UnicodeEncodeError as e:
                raise ConfigurationError(f'Document {field} {text!r} is not Latin-1 text') from e
        self.paper = name
        self.landscape = landscape
        self.title = title
        self.creator = creator
        self._paper_width, self._paper_height = size
        width, height = self.drawing_size
        self._bbox = (left, bottom, width - right, height - top)
        if self._bbox[2] <= self._bbox[0] or self._bbox[3] <= self._bbox[1]:
            raise ConfigurationError(f'Page margins leave no printable area on {name} paper')
        self._functions: dict[str, str] = {}
        self._pages: list[list[str]] = [[]]
        self._page_labels: list[str] = ['1']

    @property
    def paper_size(self) -> tuple[int, int]:
        """Portrait (width, height) of the paper in points."""
        return self._paper_width, self._paper_height

    @property
    def drawing_size(self) -> tuple[int, int]:
        """(width, height) in drawing coordinates, swapped for landscape."""
        if self.landscape:
            return self._paper_height, self._paper_width
        return self._paper_width, self._paper_height

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def get_page_bounding_box(self) -> tuple[float, float, float, float]:
        """Return the printable area (left, bottom, right, top) in drawing coordinates."""
        return self._bbox

    def add_function(self, name: str, code: str) -> None:
        """Add a named procedure set to the prolog. Adding a name twice is a no-op."""
        if name in self._functions:
            logger.debug('Procedure set %s already present', name)
            return
        self._functions[name] = textwrap.dedent(code).strip('\n') + '\n'

    def has_function(self, name: str) -> bool:
        return name in self._functions

    def function_names(self) -> list[str]:
        return list(self._functions)

    def new_page(self, label: str | None = None) -> None:
        """Start a new page; later add_to_page calls write to it."""
        self._pages.append([])
        self._page_labels.append(label or str(len(self._pages)))

    def add_to_page(self, code: str, page: int | None = None) -> None:
        """Append statements to the current page, or to 0-based page index.

        Raises:
            IndexError: No such page.
        """
        target = self._pages[-1] if page is None else self._pages[page]
        target.append(code if code.endswith('\n') else code + '\n')

    def page_code(self, page: int = -1) -> str:
        return ''.join(self._pages[page])

    def write(self, stream: TextIO) -> None:
        """Write the whole document to a text stream."""
        pw, ph = self.paper_size
        stream.write('%!PS-Adobe-3.0\n')
        if self.title:
            stream.write(f'%%Title: {self.title}\n')
        stream.write(f'%%Creator: {self.creator}\n')
        stream.write(f'%%Pages: {len(self._pages)}\n')
        stream.write(f'%%BoundingBox: 0 0 {pw} {ph}\n')
        stream.write(f'%%Orientation: {"Landscape" if self.landscape else "Portrait"}\n')
        stream.write(f'%%DocumentMedia: {self.paper} {pw} {ph} 0 () ()\n')
        stream.write('%%EndComments\n')
        stream.write('%%BeginProlog\n')
        for name, code in self._functions.items():
            stream.write(f'%%BeginResource: procset {name}\n')
            stream.write(code)
            stream.write('%%EndResource\n')
        stream.write('%%EndProlog\n')
        for number, (label, body) in enumerate(zip(self._page_labels, self._pages), start=1):
            stream.write(f'%%Page: {label} {number}\n')
            stream.write('gsave\n')
            if self.landscape:
                stream.write(f'{ps_number(pw)} 0 translate 90 rotate\n')
            for code in body:
                stream.write(code)
            stream.write('grestore showpage\n')
        stream.write('%%Trailer\n')
        stream.write('%%EOF\n')

    def getvalue(self) -> str:
        """Return the whole document as a string."""
        buf = io.StringIO()
        self.write(buf)
        return buf.getvalue()

    def output(self, path: str | Path) -> Path:
        """Write the document to path, adding a .ps suffix when it has none.

        Parent directories are created as needed.

        Returns:
            Path written.
        """
        out = Path(path)
        if not out.suffix:
            out = out.with_suffix('.ps')
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open('w', encoding='latin-1', newline='\n') as f:
            self.write(f)
        logger.info('Wrote %s (%d page%s)', out, len(self._pages), '' if len(self._pages) == 1 else 's')
        return out
