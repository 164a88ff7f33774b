"""Small helpers shared by the models, similarity and search packages."""

from .clock import parse_time_of_day, parse_timezone_offset
from .rounding import round_half_up

__all__ = ['parse_time_of_day', 'parse_timezone_offset', 'round_half_up']
