# bioreactor_monitor/synthetic.py
import logging

import numpy as np
import pandas as pd

from bioreactor_monitor.config import BATCH_COMPARISON, PARAMETERS, WAVEFORMS
from bioreactor_monitor.sampling import format_elapsed, resolve_sampling, validate_window
from bioreactor_monitor.settings import get_settings

logger = logging.getLogger(__name__)


def make_rng(seed=None):
    return np.random.RandomState(seed)


def synthesize(waveform, steps, point_count, uniform):
    """Evaluate one waveform at the given sample indices.

    `uniform` holds one U[0,1) draw per sample.
    """
    values = waveform.base + waveform.amplitude * np.sin(steps * waveform.frequency)
    values = values + waveform.drift * steps
    if point_count:
        values = values + waveform.window_drift * steps / point_count
    return values + (uniform - 0.5) * 2 * waveform.noise_half_width


def generate_series(window_hours, seed=None, rng=None, waveforms=None, settings=None):
    """Generate synthetic process telemetry for one observation window.

    Returns a DataFrame with point_count + 1 rows in time order: the
    elapsed-time label, elapsed minutes and one column per parameter.
    Pass `seed` or an explicit `rng` (anything with random(size)) for
    reproducible output; each call otherwise uses its own unseeded state.
    """
    settings = settings or get_settings()
    validate_window(window_hours, settings)
    if rng is None:
        rng = make_rng(seed)
    if waveforms is None:
        waveforms = WAVEFORMS

    sampling = resolve_sampling(window_hours)
    point_count = min(sampling.point_count, settings.max_points)
    if point_count < sampling.point_count:
        logger.warning("Capping %d points to %d", sampling.point_count, point_count)

    steps = np.arange(point_count + 1)
    elapsed = steps * sampling.interval_minutes

    columns = {
        "time": [format_elapsed(m) for m in elapsed],
        "elapsed_minutes": elapsed,
    }
    order = [p for p in PARAMETERS if p in waveforms] + [p for p in waveforms if p not in PARAMETERS]
    for name in order:
        uniform = np.asarray(rng.random(point_count + 1), dtype=float)
        columns[name] = synthesize(waveforms[name], steps, point_count, uniform)

    df = pd.DataFrame(columns)
    logger.debug(
        "Synthesized %d samples for %sh window (interval %d min)",
        len(df), window_hours, sampling.interval_minutes,
    )
    return df


def generate_batch_comparison(window_hours, seed=None, rng=None, settings=None):
    """Current vs previous batch pH and biomass, long format for charting."""
    df = generate_series(window_hours, seed=seed, rng=rng, settings=settings)
    frames = []
    for current, previous in BATCH_COMPARISON.items():
        for column, batch in ((current, "Current Batch"), (previous, "Previous Batch")):
            tmp = df[["time", column]].rename(columns={column: "value"})
            tmp["parameter"] = current
            tmp["batch"] = batch
            frames.append(tmp)
    return pd.concat(frames, ignore_index=True)
