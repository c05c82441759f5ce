"""PostScript output: document sink, statement builder, procedure sets, graph paper."""

from psgraph.rendering.builder import PostScriptBuilder, PSName
from psgraph.rendering.document import PostScriptDocument
from psgraph.rendering.paper import GraphPaper

__all__: list[str] = [
    'GraphPaper',
    'PSName',
    'PostScriptBuilder',
    'PostScriptDocument',
]
