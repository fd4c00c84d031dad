"""Plain data types shared by the quadruped controller and its helpers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Linear:
    """Linear components of a velocity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Angular:
    """Angular components of a velocity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Velocities:
    """A twist: linear and angular velocity."""

    linear: Linear = field(default_factory=Linear)
    angular: Angular = field(default_factory=Angular)


@dataclass
class Quaternion:
    """An orientation quaternion; every component defaults to zero."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0


@dataclass
class Point:
    """A position in space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Euler:
    """An orientation as roll, pitch and yaw angles in radians."""

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0


@dataclass
class Pose:
    """A position together with an Euler orientation."""

    position: Point = field(default_factory=Point)
    orientation: Euler = field(default_factory=Euler)


@dataclass
class Accelerometer:
    """Accelerometer reading."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Gyroscope:
    """Gyroscope reading."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Magnetometer:
    """Magnetometer reading."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class GaitConfig:
    """Parameters that shape the gait of the robot."""

    knee_orientation: str = ">>"
    pantograph_leg: bool = False
    odom_scaler: float = 0.0
    max_linear_velocity_x: float = 0.0
    max_linear_velocity_y: float = 0.0
    max_angular_velocity_z: float = 0.0
    com_x_translation: float = 0.0
    swing_height: float = 0.0
    stance_depth: float = 0.0
    stance_duration: float = 0.0
    nominal_height: float = 0.0