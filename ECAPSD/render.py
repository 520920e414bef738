# =========== START of render.py ===========
from __future__ import annotations
import matplotlib
matplotlib.use('Agg')
matplotlib.interactive(False)
import matplotlib.pyplot as plt
plt.ioff()
from typing import Optional, Tuple

from .analytics import PowerCurve
from .logging_config import logger
from .settings import GlobalSettings
from .utils import log_errors



@log_errors
def render_power_curve(curve: PowerCurve,
                       output_path: str = GlobalSettings.Visualization.OUTPUT_FILE,
                       x_range: Optional[Tuple[float, float]] = GlobalSettings.Visualization.X_RANGE,
                       y_range: Optional[Tuple[float, float]] = GlobalSettings.Visualization.Y_RANGE) -> str:
    """Scatter plot of (frequency, power) pairs saved to output_path.
    The image format follows the file extension. Save errors propagate."""
    viz = GlobalSettings.Visualization
    fig, ax = plt.subplots(figsize=viz.FIGURE_SIZE)
    try:
        xs = [f for f, _ in curve]
        ys = [p for _, p in curve]
        ax.scatter(xs, ys, marker=viz.MARKER, color=viz.MARKER_COLOR, s=viz.MARKER_SIZE)
        if x_range is not None:
            ax.set_xlim(*x_range)
        if y_range is not None:
            ax.set_ylim(*y_range)
        ax.set_xlabel(viz.X_LABEL)
        ax.set_ylabel(viz.Y_LABEL)
        fig.savefig(output_path)
    finally:
        plt.close(fig)
    logger.info(f"Saved power spectrum plot ({len(curve)} points) to {output_path}")
    return output_path


# =========== END of render.py ===========
