"""
Common geometry types for the certification scanning pipeline.

This module provides Pydantic-based type definitions for the core geometric
values passed between detection, alignment and display collaborators: points
and four-cornered quadrilaterals.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Integration with numpy arrays and OpenCV
"""

from typing import List, Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from src.alignment.geometric_validator import is_convex_quadrilateral


class Point(BaseModel):
    """
    Type-safe representation of a 2D point (x, y) in pixel coordinates.

    Coordinates are real-valued: corners coming out of contour approximation
    are integers, but centroids and rectified corners are not.

    Example:
        >>> point = Point(x=100, y=200.5)
        >>> arr = point.to_numpy()  # array([100. , 200.5])
        >>> point2 = Point.from_numpy(np.array([150, 250]))
    """

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v: Union[int, float]) -> float:
        """Accept any real number (including numpy scalars) as a coordinate."""
        if isinstance(v, (int, float, np.integer, np.floating)):
            return float(v)
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """
        Create Point from numpy array of shape (2,).

        Raises:
            ValueError: If array shape is not (2,).
        """
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert Point to numpy array [x, y]."""
        return np.array([self.x, self.y], dtype=dtype)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert Point to tuple (x, y)."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def __repr__(self) -> str:
        return f"Point(x={self.x:g}, y={self.y:g})"


class Quadrilateral(BaseModel):
    """
    Ordered sequence of exactly four corner points.

    Once emitted by the candidate selector the order is canonical:
    top-left, top-right, bottom-right, bottom-left (clockwise on screen).
    The corners must form a convex, non-self-intersecting quadrilateral.

    Example:
        >>> quad = Quadrilateral.from_numpy(np.array([[0, 0], [10, 0], [10, 10], [0, 10]]))
        >>> quad.top_left
        Point(x=0, y=0)
    """

    points: List[Point] = Field(..., min_length=4, max_length=4)

    @model_validator(mode="after")
    def _check_convex(self) -> "Quadrilateral":
        if not is_convex_quadrilateral([p.to_tuple() for p in self.points]):
            raise ValueError("Corners must form a convex quadrilateral")
        return self

    @classmethod
    def from_numpy(cls, arr: Union[np.ndarray, list]) -> "Quadrilateral":
        """
        Create a Quadrilateral from an array-like of shape (4, 2).

        Raises:
            ValueError: If the input does not hold exactly 4 points or the
                points are not convex.
        """
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (4, 2):
            raise ValueError(f"Expected array of shape (4, 2), got {arr.shape}")
        return cls(points=[Point.from_numpy(p) for p in arr])

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert to a (4, 2) numpy array in stored order."""
        return np.array([p.to_tuple() for p in self.points], dtype=dtype)

    def to_list(self) -> List[List[float]]:
        """Convert to nested list [[x, y], ...] (JSON friendly)."""
        return [[p.x, p.y] for p in self.points]

    @property
    def top_left(self) -> Point:
        return self.points[0]

    @property
    def top_right(self) -> Point:
        return self.points[1]

    @property
    def bottom_right(self) -> Point:
        return self.points[2]

    @property
    def bottom_left(self) -> Point:
        return self.points[3]

    @property
    def centroid(self) -> Point:
        """Mean of the four corners."""
        return Point(
            x=sum(p.x for p in self.points) / 4.0,
            y=sum(p.y for p in self.points) / 4.0,
        )

    def __repr__(self) -> str:
        return f"Quadrilateral({', '.join(repr(p) for p in self.points)})"
