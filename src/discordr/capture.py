from __future__ import annotations

import contextlib
import io
import logging
import os
import pickle
import tempfile
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Callable, Optional

from .constants import FORMULA_DENSITY, TEMP_PREFIX
from .errors import EmptyInput, NoPlotAvailable, NoValuesProvided
from .model import FilePayload

logger = logging.getLogger(__name__)


def temp_path(suffix: str) -> Path:
    fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=suffix)
    os.close(fd)
    return Path(name)


@contextlib.contextmanager
def _output_path(path: Optional[str | Path], suffix: str) -> Iterator[Path]:
    """
    Yield where to write. A temp file made here is removed if the write fails.
    """
    if path:
        yield Path(path)
        return
    out = temp_path(suffix)
    try:
        yield out
    except BaseException:
        out.unlink(missing_ok=True)
        raise


def capture_current_plot(path: Optional[str | Path] = None) -> FilePayload:
    """
    Save the current matplotlib figure as a PNG at its on-screen pixel size.
    """
    import matplotlib.pyplot as plt

    if not plt.get_fignums():
        raise NoPlotAvailable("No plots found.")
    fig = plt.gcf()
    # saving at the figure dpi keeps the on-screen pixel size
    with _output_path(path, ".png") as out:
        fig.savefig(out, format="png", dpi=fig.dpi)
    logger.debug("saved current plot at %s dpi to %s", fig.dpi, out)
    return FilePayload(out)


def capture_structured_plot(plot: Any, path: Optional[str | Path] = None) -> FilePayload:
    """
    Save a declarative plot object (plotnine ``ggplot``, seaborn ``Plot``...).

    Anything with a ``save(path)`` method works.
    """
    if plot is None:
        raise NoPlotAvailable("No structured plot provided.")
    with _output_path(path, ".png") as out:
        plot.save(str(out))
        if not out.exists() or out.stat().st_size == 0:
            raise NoPlotAvailable(f"Plot did not render to {out}.")
    return FilePayload(out)


def serialize_values(
    values: Mapping[str, Any],
    path: Optional[str | Path] = None,
    *,
    strict: bool = False,
) -> Optional[FilePayload]:
    if not values:
        if strict:
            raise NoValuesProvided("No objects provided.")
        logger.info("No objects provided.")
        return None
    with _output_path(path, ".pkl") as out, out.open("wb") as f:
        pickle.dump(dict(values), f, protocol=pickle.HIGHEST_PROTOCOL)
    logger.debug("pickled %s to %s", ", ".join(values), out)
    return FilePayload(out)


def render_formula(
    markup: str,
    path: Optional[str | Path] = None,
    density: int = FORMULA_DENSITY,
    *,
    strict: bool = False,
) -> Optional[FilePayload]:
    """
    Render TeX-style math to a PNG with matplotlib's mathtext.

    Markup without ``$`` delimiters is treated as a single math expression.
    """
    if not markup:
        if strict:
            raise EmptyInput("No tex string provided.")
        logger.info("No tex string provided.")
        return None
    from matplotlib import mathtext

    if "$" not in markup:
        markup = f"${markup}$"
    with _output_path(path, ".png") as out:
        mathtext.math_to_image(markup, str(out), dpi=density, format="png")
    return FilePayload(out)


def capture_console(*calls: Callable[[], Any]) -> str:
    """
    Run each callable and return everything it printed.

    Non-None return values are printed with ``repr``, the way an
    interactive prompt shows them.
    """
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        for call in calls:
            value = call()
            if value is not None:
                print(repr(value))
    return buf.getvalue()
