from time import perf_counter

from windmix import logger, time

REPORT_FORMAT = (
    " Current iteration: {iteration:<5} ({model_time:.2f}/{model_total:.2f}{unit} | {percentage:>4.1f}% | "
    "{cost:.2f}{cost_unit}/(model hour) | {eta:.1f}{eta_unit} left)"
)


class LoggingProgressBar:
    """Reports run progress through the logger every ``report_every`` iterations.

    Besides model time and percentage done, each report contains the wall time
    needed per simulated hour and an estimate of the remaining wall time.
    """

    def __init__(self, total, start_time=0.0, start_iteration=0, report_every=1):
        self.total = total
        self.start_time = start_time
        self.start_iteration = start_iteration
        self.report_every = max(int(report_every), 1)

        self.iteration = start_iteration
        self.model_time = start_time
        self._wall_start = None
        self._unit = time.format_time(total)[1]

    def __enter__(self):
        self._wall_start = perf_counter()
        self.flush()
        return self

    def __exit__(self, *exc_info):
        return False

    def advance_time(self, amount):
        self.iteration += 1
        self.model_time += amount

        finished = self.model_time >= self.total
        if finished or (self.iteration - self.start_iteration) % self.report_every == 0:
            self.flush()

    def _wall_per_model_second(self):
        elapsed_model = self.model_time - self.start_time
        if elapsed_model <= 0:
            return 0.0

        return (perf_counter() - self._wall_start) / elapsed_model

    def flush(self):
        wall_per_model_second = self._wall_per_model_second()

        cost, cost_unit = time.format_time(wall_per_model_second * time.SECONDS_PER["hours"])
        eta, eta_unit = time.format_time(max(self.total - self.model_time, 0.0) * wall_per_model_second)

        span = self.total - self.start_time
        percentage = 100.0 if span <= 0 else 100.0 * (self.model_time - self.start_time) / span

        logger.info(
            REPORT_FORMAT,
            iteration=self.iteration,
            model_time=time.in_unit(self.model_time, self._unit),
            model_total=time.in_unit(self.total, self._unit),
            unit=self._unit[0],
            percentage=min(percentage, 100.0),
            cost=cost,
            cost_unit=cost_unit[0],
            eta=eta,
            eta_unit=eta_unit[0],
        )


def get_progress_bar(state, report_every=None):
    settings = state.settings
    vs = state.variables

    return LoggingProgressBar(
        total=settings.stop_time,
        start_time=float(vs.time),
        start_iteration=int(vs.itt),
        report_every=settings.progress_interval if report_every is None else report_every,
    )
