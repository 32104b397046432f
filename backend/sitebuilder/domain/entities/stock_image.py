"""Domain entity for a stock photo returned by an image provider."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StockImage:
    image_url: str
    photographer: str = ""
    alt: str = ""
