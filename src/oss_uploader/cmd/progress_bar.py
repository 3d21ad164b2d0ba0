from tqdm import tqdm


class TqdmProgress:
    """Progress listener that draws a terminal bar."""

    def __init__(self, total: int, desc: str) -> None:
        self._bar = tqdm(
            total=total,
            desc=desc,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
        )

    def on_bytes(self, n: int) -> None:
        self._bar.update(n)

    def on_done(self) -> None:
        self._bar.close()

    def close(self) -> None:
        self._bar.close()

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
