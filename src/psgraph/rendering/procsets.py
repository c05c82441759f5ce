"""PostScript procedure sets written once into a document's prolog.

GraphPaper (gpaperdict) draws the grid, axes, labels and headings; GraphStyle
(gstyledict) switches between line, point and bar settings and builds point
shapes; GraphKey (graphkeydict) lays out the key box; BarChart and XYChart
draw data items using the current style.
"""

from __future__ import annotations

from typing import Protocol

GRAPH_PAPER = 'GraphPaper'
GRAPH_STYLE = 'GraphStyle'
GRAPH_KEY = 'GraphKey'
BAR_CHART = 'BarChart'
XY_CHART = 'XYChart'


class ProcedureSink(Protocol):
    def add_function(self, name: str, code: str) -> None: ...

    def has_function(self, name: str) -> bool: ...


_GRAPH_PAPER_CODE = r"""
/gpaperdict 110 dict def
gpaperdict begin
/finish 0 def
/labelbuf 80 string def

% _ array|gray => _
/gpapercolor {
    gpaperdict begin
    dup type /arraytype eq {
        aload pop
        setrgbcolor
    }{
        setgray
    } ifelse
    end
} bind def

% _ font size color => _
/gpaperfont {
    gpaperdict begin
    gpapercolor
    /fontsize exch def
    findfont fontsize scalefont setfont
    end
} bind def

% _ str x y => _
/centered {
    3 2 roll labelbuf cvs 3 1 roll
    2 index stringwidth pop 2 div neg
    3 2 roll add exch
    moveto show
} bind def

% _ str x y => _
/rjustified {
    3 2 roll labelbuf cvs 3 1 roll
    2 index stringwidth pop neg
    3 2 roll add exch
    moveto show
} bind def

% _ str x y => _
/rotated {
    3 2 roll labelbuf cvs 3 1 roll
    gsave
    translate
    -90 rotate
    0 0 moveto show
    grestore
} bind def

% _ x y => _
/init_xy {
    /setstrokeadjust where { pop true setstrokeadjust } if
    newpath
    moveto
    store_xy
    stroke
} bind def

% _ => _
/store_xy {
    gpaperdict begin
    currentpoint
    /y exch def
    /x exch def
    end
} bind def

% _ array => _ array array
/copy_array {
    gpaperdict begin
    mark 1 index aload pop
    /array_max counttomark 2 sub def
    ]
    end
} bind def

% Walk nested counters over the factor array calling fn with the depth of
% each mark.
% _ factor_array fn_name => _
/drawonegrid {
    gpaperdict begin
    /label 0 def
    /drawline exch cvx def
    copy_array
    0 drawline
    /finish 0 def
    {
        array_max -1 0
        {
            2 copy 2 copy get 1 sub put
            dup /factor exch def
            2 copy get 0 gt { pop exit } if
            dup 0 eq {
                2 copy get 0 eq {
                    /finish 1 def
                } if
            } if
            2 copy dup 5 index
            exch get put
            pop
        } for
        factor drawline
        finish 1 eq { exit } if
    } loop
    pop pop
    end
} def

% _ depth => _ depth
/setlines {
    dup 0 eq {
        heavyw setlinewidth
        heavyc gpapercolor
    }{
        dup 1 eq {
            midw setlinewidth
            midc gpapercolor
        }{
            lightw setlinewidth
            lightc gpapercolor
        } ifelse
    } ifelse
} bind def

% _ x0 y0 x1 y1 outline_col outline_width => _
/drawbox {
    7 dict begin
    gsave
    /boxw exch def /boxc exch def
    /y1 exch def /x1 exch def /y0 exch def /x0 exch def
    newpath
    x0 y0 moveto x0 y1 lineto x1 y1 lineto x1 y0 lineto
    closepath
    boxc gpapercolor boxw setlinewidth
    stroke
    grestore
    end
} bind def

% _ x0 y0 x1 y1 fill_col outline_col outline_width => _
/fillbox {
    8 dict begin
    gsave
    /boxw exch def /boxc exch def /fillc exch def
    /y1 exch def /x1 exch def /y0 exch def /x0 exch def
    newpath
    x0 y0 moveto x0 y1 lineto x1 y1 lineto x1 y0 lineto
    closepath
    gsave fillc gpapercolor fill grestore
    boxc gpapercolor boxw setlinewidth
    stroke
    grestore
    end
} bind def

% _ x0 y0 x1 y1 bgnd => _
/graph_area {
    gpaperdict begin
    /bgnd exch def
    /gy1 exch def
    /gx1 exch def
    /gy0 exch def
    /gx0 exch def
    /width gx1 gx0 sub def
    /height gy1 gy0 sub def
    gx0 gy0 gx1 gy1 bgnd bgnd 0.25 fillbox
    end
} bind def

% _ heavyw heavyc midw midc lightw lightc => _
/graph_colors {
    gpaperdict begin
    /lightc exch def
    /lightw exch def
    /midc exch def
    /midw exch def
    /heavyc exch def
    /heavyw exch def
    end
} bind def

% _ x0 y0 x1 y1 => _
/xaxis_area {
    gpaperdict begin
    /xy1 exch def
    /xx1 exch def
    /xy0 exch def
    /xx0 exch def
    end
} bind def

% _ factors labels depth flags font size color title => _
/xaxis_labels {
    gpaperdict begin
    /xtitle exch def
    /xcol exch def
    /xsize exch def
    /xfont exch def
    /xflags exch def
    /xldepth exch def
    /xlabels exch def
    /xfactors exch def
    end
} bind def

% _ markmin markmul markmax markgap => _
/xaxis_marks {
    gpaperdict begin
    /xmarkgap exch def
    /xmarkmax exch def
    /xmarkmul exch def
    /xmarkmin exch def
    end
} bind def

% _ x0 y0 x1 y1 => _
/yaxis_area {
    gpaperdict begin
    /yy1 exch def
    /yx1 exch def
    /yy0 exch def
    /yx0 exch def
    end
} bind def

% _ factors labels depth flags font size color title => _
/yaxis_labels {
    gpaperdict begin
    /ytitle exch def
    /ycol exch def
    /ysize exch def
    /yfont exch def
    /yflags exch def
    /yldepth exch def
    /ylabels exch def
    /yfactors exch def
    end
} bind def

% _ markmin markmul markmax markgap => _
/yaxis_marks {
    gpaperdict begin
    /ymarkgap exch def
    /ymarkmax exch def
    /ymarkmul exch def
    /ymarkmin exch def
    end
} bind def

% _ x0 y0 x1 y1 => _
/heading_area {
    gpaperdict begin
    /hy1 exch def
    /hx1 exch def
    /hy0 exch def
    /hx0 exch def
    end
} bind def

% _ font size color title => _
/heading_labels {
    gpaperdict begin
    /htitle exch def
    /hcol exch def
    /hsize exch def
    /hfont exch def
    end
} bind def

% _ xm xc ym yc => _
/conv_consts {
    gpaperdict begin
    /ylc exch def
    /ylm exch def
    /xlc exch def
    /xlm exch def
    end
} bind def

% _ logical => physical
/px { gpaperdict begin xlm mul xlc add end } bind def

% _ logical => physical
/py { gpaperdict begin ylm mul ylc add end } bind def

% _ => _
/drawgpaper {
    gpaperdict begin
        hfont hsize hcol gpaperfont
        htitle hx1 hx0 add 2 div hy1 hsize sub centered

        xfont xsize xcol gpaperfont
        xtitle xx1 xy0 rjustified
        gx0 gy0 init_xy
        xfactors /xdraw drawonegrid

        yfont ysize ycol gpaperfont
        ytitle yx0 hy0 ysize 0.5 mul add moveto show
        gx0 gy0 init_xy
        yfactors /ydraw drawonegrid

        gx0 gy0 gx1 gy1 heavyc heavyw drawbox
    end
} bind def

% _ depth => _
/xdraw {
    gpaperdict begin
        dup xldepth le {
            gsave
                xcol gpapercolor
                xlabels label get
                xflags 1 and 1 eq {
                    xflags 2 and 2 eq {
                        x fontsize 0.33 mul sub xmarkgap 0.5 mul add
                        y xmarkmax sub 2 sub
                    }{
                        x fontsize 0.33 mul sub
                        y xmarkmax sub 2 sub
                    } ifelse
                    rotated
                }{
                    xflags 2 and 2 eq {
                        x xmarkgap 0.5 mul add
                        y xmarkmax sub fontsize sub
                    }{
                        x
                        y xmarkmax sub fontsize sub
                    } ifelse
                    centered
                } ifelse
            grestore
            /label label 1 add def
        } if
        setlines
        newpath
        x y moveto
        dup xmarkmul mul xmarkmin add
        xmarkmax exch sub
        dup neg 0 exch rlineto
        0 exch rmoveto
        dup 2 le {
            0 height rlineto
            0 height neg rmoveto
        } if
        xmarkgap 0 rmoveto
        store_xy
        stroke
        pop
    end
} bind def

% _ depth => _
/ydraw {
    gpaperdict begin
        dup yldepth le {
            gsave
                ycol gpapercolor
                ylabels label get
                yflags 1 and 1 eq {
                    yflags 2 and 2 eq {
                        x ymarkmax sub fontsize sub
                        1 index labelbuf cvs stringwidth pop 2 div
                        y add ymarkgap 0.5 mul add
                    }{
                        x ymarkmax sub fontsize sub
                        1 index labelbuf cvs stringwidth pop 2 div
                        y add
                    } ifelse
                    rotated
                }{
                    yflags 2 and 2 eq {
                        x ymarkmax sub 2 sub
                        y fontsize 0.33 mul sub ymarkgap 0.5 mul add
                    }{
                        x ymarkmax sub 2 sub
                        y fontsize 0.33 mul sub
                    } ifelse
                    rjustified
                } ifelse
            grestore
            /label label 1 add def
        } if
        setlines
        newpath
        x y moveto
        dup ymarkmul mul ymarkmin add
        ymarkmax exch sub
        dup neg 0 rlineto
        0 rmoveto
        dup 2 le {
            width 0 rlineto
            width neg 0 rmoveto
        } if
        0 ymarkgap rmoveto
        store_xy
        stroke
        pop
    end
} bind def

end % gpaperdict
"""

_GRAPH_STYLE_CODE = r"""
/gstyledict 40 dict def
gstyledict begin
% _ => _
/line_outer {
    gpaperdict begin gstyledict begin
        locolor gpapercolor
        lowidth setlinewidth
        lostyle 0 setdash
    end end
} bind def

% _ => _
/line_inner {
    gpaperdict begin gstyledict begin
        licolor gpapercolor
        liwidth setlinewidth
        listyle 0 setdash
    end end
} bind def

% _ => _
/point_outer {
    gpaperdict begin gstyledict begin
        pocolor gpapercolor
        powidth setlinewidth
        [ ] 0 setdash
    end end
} bind def

% _ => _
/point_inner {
    gpaperdict begin gstyledict begin
        picolor gpapercolor
        piwidth setlinewidth
        [ ] 0 setdash
    end end
} bind def

% _ => _
/bar_outer {
    gpaperdict begin gstyledict begin
        bocolor gpapercolor
        bowidth setlinewidth
        [ ] 0 setdash
    end end
} bind def

% _ => _
/bar_inner {
    gpaperdict begin gstyledict begin
        bicolor gpapercolor
        biwidth setlinewidth
        [ ] 0 setdash
    end end
} bind def

% _ x y => _
/make_plus {
    gstyledict begin
        newpath
        moveto
        /dx ppsize 0.5 mul def
        /dy ppsize 0.5 mul def
        1 -1 rmoveto
        dx 0 rlineto
        0 1 rlineto
        dx neg 0 rlineto
        0 dy rlineto
        -1 0 rlineto
        0 dy neg rlineto
        dx neg 0 rlineto
        0 -1 rlineto
        dx 0 rlineto
        0 dy neg rlineto
        1 0 rlineto
        0 dy rlineto
        closepath
    end
} bind def

% _ x y => _
/make_cross {
    gstyledict begin
        newpath
        moveto
        /dx ppsize 0.7071 mul def
        /dy ppsize 0.7071 mul def
        dx dy rlineto
        dx neg dy neg rlineto
        dx neg dy rlineto
        dx dy neg rlineto
        dx neg dy neg rlineto
        dx dy rlineto
        dx dy neg rlineto
        dx neg dy rlineto
        closepath
    end
} bind def

% _ x y => _
/make_dot {
    gstyledict begin
        newpath
        1 index ppsize 2 div add 1 index moveto
        ppsize 2 div 0 360 arc
        closepath
    end
} bind def

% _ x y => _
/make_circle {
    gstyledict begin
        newpath
        1 index ppsize 0.6 mul add 1 index moveto
        2 copy ppsize 0.6 mul 0 360 arc
        1 index ppsize 0.5 mul add 1 index moveto
        ppsize 0.5 mul 0 360 arc
        closepath
    end
} bind def

% _ x y => _
/make_square {
    gstyledict begin
        newpath
        ppsize 2 div add exch
        ppsize 2 div add exch moveto
        0 ppsize neg rlineto
        ppsize neg 0 rlineto
        0 ppsize rlineto
        closepath
    end
} bind def

% _ x y => _
/make_diamond {
    gstyledict begin
        newpath
        /dx ppsize 0.5 mul def
        /dy ppsize 0.75 mul def
        dy add moveto
        dx neg dy neg rlineto
        dx dy neg rlineto
        dx dy rlineto
        closepath
    end
} bind def
end % gstyledict
"""

_GRAPH_KEY_CODE = r"""
/graphkeydict 40 dict def
graphkeydict begin
% _ title font size color boxw boxc fillc => _
/keybox {
    gpaperdict begin
    graphkeydict begin
        newpath
        kx0 ky0 moveto
        kx1 ky0 lineto
        kx1 ky1 lineto
        kx0 ky1 lineto
        closepath
        gsave gpapercolor fill grestore
        gpapercolor
        setlinewidth
        [ ] 0 setdash
        stroke
        /tcol exch def
        /tsize exch def
        /tfont exch def
        tfont tsize tcol gpaperfont
        kx0 kx1 add 2 div
        ky1 tsize 1.2 mul sub
        centered
    end end
} bind def

% _ => _
/movetoicon {
    graphkeydict begin
        /kix0 kx0 kdx add khspc add def
        /kiy0 ky0 kdy add def
        /kix1 kix0 kdxicon add def
        /kiy1 kiy0 kdyicon add def
        kix0 kiy0 moveto
    end
} bind def

% _ => _
/movetotext {
    graphkeydict begin
        gpaperdict begin
            kfont ksize kcol gpaperfont
        end
        /ktx0 kx0 kdx add khspc add kdxicon add khspc add def
        /kty0 ky0 kdy add def
        /ktx1 ktx0 kdxtext add def
        /kty1 kty0 kdyicon add def
        ktx0 kty0 kty1 add 2 div ksize 2 div sub kvspc 2 div add moveto
    end
} bind def
end % graphkeydict
"""

_BAR_CHART_CODE = r"""
/barchartdict 8 dict def
barchartdict begin
% _ x0 y0 x1 y1 => _
/drawbar {
    barchartdict begin
        /by1 exch def /bx1 exch def /by0 exch def /bx0 exch def
        newpath
        bx0 by0 moveto bx0 by1 lineto bx1 by1 lineto bx1 by0 lineto
        closepath
        gsave bar_inner fill grestore
        bar_outer stroke
    end
} bind def
end % barchartdict
"""

_XY_CHART_CODE = r"""
/xychartdict 8 dict def
xychartdict begin
% _ [x0 y0 x1 y1 ...] max_index => _
/drawxyline {
    xychartdict begin
        /maxidx exch def
        /pts exch def
        newpath
        pts 0 get pts 1 get moveto
        2 2 maxidx {
            dup pts exch get
            exch 1 add pts exch get
            lineto
        } for
        stroke
    end
} bind def

% _ x y => _
/draw1point {
    gstyledict begin ppshape end
    gsave fill grestore
    stroke
} bind def
end % xychartdict
"""

PROCSETS: dict[str, str] = {
    GRAPH_PAPER: _GRAPH_PAPER_CODE,
    GRAPH_STYLE: _GRAPH_STYLE_CODE,
    GRAPH_KEY: _GRAPH_KEY_CODE,
    BAR_CHART: _BAR_CHART_CODE,
    XY_CHART: _XY_CHART_CODE,
}

# Procedure sets that must be present before each one works
_REQUIRES: dict[str, tuple[str, ...]] = {
    GRAPH_PAPER: (),
    GRAPH_STYLE: (GRAPH_PAPER,),
    GRAPH_KEY: (GRAPH_PAPER,),
    BAR_CHART: (GRAPH_PAPER, GRAPH_STYLE),
    XY_CHART: (GRAPH_PAPER, GRAPH_STYLE),
}


def install(document: ProcedureSink, name: str) -> None:
    """Add procedure set name, and those it depends on, to document.

    Raises:
        KeyError: Unknown procedure set name.
    """
    for required in _REQUIRES[name]:
        install(document, required)
    if not document.has_function(name):
        document.add_function(name, PROCSETS[name])
