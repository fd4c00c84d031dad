"""Turn raw robot readings into timestamped sensor and command messages."""

from __future__ import annotations

import argparse
import json
import sys
import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any, TextIO

from champkit.components import Accelerometer, Gyroscope, Magnetometer, Quaternion
from champkit.params import ParameterError
from champkit.urdf import get_joint_names

IMU_TOPIC = "imu/data"
MAG_TOPIC = "imu/mag"
JOINT_STATES_TOPIC = "joint_states"
JOINT_COMMAND_TOPIC = "joint_group_position_controller/command"
FOOT_CONTACTS_TOPIC = "foot_contacts"

ORIENTATION_VARIANCE = 0.0025
ANGULAR_VELOCITY_VARIANCE = 0.000001
LINEAR_ACCELERATION_VARIANCE = 0.0001
MAGNETIC_FIELD_VARIANCE = 0.000001

JOINT_COUNT = 12
LEG_COUNT = 4
COMMAND_TIME_FROM_START = 1.0 / 60.0


def _diagonal(variance: float) -> tuple[float, ...]:
    """A row-major 3x3 covariance with variance on the diagonal."""
    return tuple(variance if row == col else 0.0 for row in range(3) for col in range(3))


def _zero_covariance() -> tuple[float, ...]:
    return (0.0,) * 9


@dataclass
class Header:
    """Timestamp in seconds and the frame a message refers to."""

    stamp: float = 0.0
    frame_id: str = ""


@dataclass
class RawImu:
    """An unprocessed inertial reading as delivered by the robot."""

    orientation: Quaternion = field(default_factory=Quaternion)
    linear_acceleration: Accelerometer = field(default_factory=Accelerometer)
    angular_velocity: Gyroscope = field(default_factory=Gyroscope)
    magnetic_field: Magnetometer = field(default_factory=Magnetometer)


@dataclass
class Imu:
    """An inertial measurement with its covariances."""

    header: Header = field(default_factory=Header)
    orientation: Quaternion = field(default_factory=Quaternion)
    orientation_covariance: tuple[float, ...] = field(default_factory=_zero_covariance)
    angular_velocity: Gyroscope = field(default_factory=Gyroscope)
    angular_velocity_covariance: tuple[float, ...] = field(default_factory=_zero_covariance)
    linear_acceleration: Accelerometer = field(default_factory=Accelerometer)
    linear_acceleration_covariance: tuple[float, ...] = field(default_factory=_zero_covariance)


@dataclass
class MagneticField:
    """A magnetometer measurement with its covariance."""

    header: Header = field(default_factory=Header)
    magnetic_field: Magnetometer = field(default_factory=Magnetometer)
    magnetic_field_covariance: tuple[float, ...] = field(default_factory=_zero_covariance)


@dataclass
class JointState:
    """Named joint positions."""

    header: Header = field(default_factory=Header)
    name: list[str] = field(default_factory=list)
    position: list[float] = field(default_factory=list)


@dataclass
class JointTrajectoryPoint:
    """Target joint positions to reach after time_from_start seconds."""

    positions: list[float] = field(default_factory=list)
    time_from_start: float = 0.0


@dataclass
class JointTrajectory:
    """A joint position command made of trajectory points."""

    header: Header = field(default_factory=Header)
    joint_names: list[str] = field(default_factory=list)
    points: list[JointTrajectoryPoint] = field(default_factory=list)


@dataclass
class ContactsStamped:
    """Which of the four feet touch the ground."""

    header: Header = field(default_factory=Header)
    contacts: list[bool] = field(default_factory=list)


def frame_prefix(namespace: str) -> str:
    """Turn a node namespace into a frame prefix: '/robot' gives 'robot/', '/' gives ''."""
    if len(namespace) > 1:
        return namespace[1:] + "/"
    return ""


def _now(stamp: float | None) -> float:
    return time.time() if stamp is None else stamp


class MessageRelay:
    """Relays raw IMU, joint and contact readings as standard messages."""

    def __init__(
        self,
        joint_names: Sequence[str],
        gazebo: bool = False,
        has_imu: bool = True,
        namespace: str = "/",
    ):
        self.joint_names = list(joint_names)
        self.gazebo = gazebo
        self.has_imu = has_imu
        self.namespace = namespace
        self._frame_prefix = frame_prefix(namespace)

    @property
    def imu_frame(self) -> str:
        """Frame id stamped on IMU messages."""
        return self._frame_prefix + "imu_link"

    def relay_imu(
        self, msg: RawImu, stamp: float | None = None
    ) -> tuple[Imu, MagneticField] | None:
        """Build IMU and magnetometer messages; None when the robot has no IMU."""
        if not self.has_imu:
            return None
        now = _now(stamp)
        imu = Imu(
            header=Header(now, self.imu_frame),
            orientation=Quaternion(
                msg.orientation.x, msg.orientation.y, msg.orientation.z, msg.orientation.w
            ),
            orientation_covariance=_diagonal(ORIENTATION_VARIANCE),
            angular_velocity=Gyroscope(
                msg.angular_velocity.x, msg.angular_velocity.y, msg.angular_velocity.z
            ),
            angular_velocity_covariance=_diagonal(ANGULAR_VELOCITY_VARIANCE),
            linear_acceleration=Accelerometer(
                msg.linear_acceleration.x,
                msg.linear_acceleration.y,
                msg.linear_acceleration.z,
            ),
            linear_acceleration_covariance=_diagonal(LINEAR_ACCELERATION_VARIANCE),
        )
        mag = MagneticField(
            header=Header(now, self.imu_frame),
            magnetic_field=Magnetometer(
                msg.magnetic_field.x, msg.magnetic_field.y, msg.magnetic_field.z
            ),
            magnetic_field_covariance=_diagonal(MAGNETIC_FIELD_VARIANCE),
        )
        return imu, mag

    def relay_joints(
        self, positions: Sequence[float], stamp: float | None = None
    ) -> JointTrajectory | JointState:
        """A position command in simulation, otherwise a joint state message."""
        now = _now(stamp)
        if self.gazebo:
            if len(positions) < JOINT_COUNT:
                raise ValueError(
                    f"expected {JOINT_COUNT} joint positions, got {len(positions)}"
                )
            point = JointTrajectoryPoint(
                positions=[float(p) for p in positions[:JOINT_COUNT]],
                time_from_start=COMMAND_TIME_FROM_START,
            )
            return JointTrajectory(
                header=Header(now), joint_names=list(self.joint_names), points=[point]
            )
        count = len(self.joint_names)
        if len(positions) < count:
            raise ValueError(f"expected {count} joint positions, got {len(positions)}")
        return JointState(
            header=Header(now),
            name=list(self.joint_names),
            position=[float(p) for p in positions[:count]],
        )

    def relay_contacts(
        self, contacts: Sequence[bool], stamp: float | None = None
    ) -> ContactsStamped:
        """Stamp the contact state of the four feet."""
        if len(contacts) < LEG_COUNT:
            raise ValueError(f"expected {LEG_COUNT} foot contacts, got {len(contacts)}")
        return ContactsStamped(
            header=Header(_now(stamp)), contacts=[bool(c) for c in contacts[:LEG_COUNT]]
        )


def _flatten(params: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in params.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name + "."))
        else:
            flat[name] = value
    return flat


def _vector(data: Mapping[str, Any] | None, cls, keys: str = "xyz"):
    data = data or {}
    return cls(*(float(data.get(k, 0.0)) for k in keys))


def _raw_imu(record: Mapping[str, Any]) -> RawImu:
    return RawImu(
        orientation=_vector(record.get("orientation"), Quaternion, "xyzw"),
        linear_acceleration=_vector(record.get("linear_acceleration"), Accelerometer),
        angular_velocity=_vector(record.get("angular_velocity"), Gyroscope),
        magnetic_field=_vector(record.get("magnetic_field"), Magnetometer),
    )


def _handle(relay: MessageRelay, record: Mapping[str, Any]) -> Iterable[tuple[str, Any]]:
    kind = record.get("type")
    stamp = record.get("stamp")
    if kind == "imu":
        result = relay.relay_imu(_raw_imu(record), stamp)
        if result is not None:
            imu, mag = result
            yield IMU_TOPIC, imu
            yield MAG_TOPIC, mag
    elif kind == "joints":
        message = relay.relay_joints(record.get("position", []), stamp)
        topic = JOINT_COMMAND_TOPIC if relay.gazebo else JOINT_STATES_TOPIC
        yield topic, message
    elif kind == "contacts":
        yield FOOT_CONTACTS_TOPIC, relay.relay_contacts(record.get("contacts", []), stamp)
    else:
        raise ValueError(f"unknown message type {kind!r}")


def _run(relay: MessageRelay, source: TextIO, sink: TextIO) -> None:
    for line in source:
        line = line.strip()
        if not line:
            continue
        for topic, message in _handle(relay, json.loads(line)):
            sink.write(json.dumps({"topic": topic, "message": asdict(message)}) + "\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Read raw readings as JSON lines on stdin and write relayed messages to stdout."""
    parser = argparse.ArgumentParser(
        prog="message-relay",
        description="Relay raw quadruped readings as timestamped messages.",
    )
    parser.add_argument("--params", required=True, help="JSON file holding joints_map")
    parser.add_argument("--gazebo", action="store_true", help="emit joint position commands")
    parser.add_argument("--no-imu", dest="has_imu", action="store_false",
                        help="do not publish IMU messages")
    parser.add_argument("--namespace", default="/", help="node namespace")
    args = parser.parse_args(argv)

    try:
        with open(args.params, encoding="utf-8") as handle:
            params = _flatten(json.load(handle))
        joint_names = get_joint_names(params)
        relay = MessageRelay(joint_names, args.gazebo, args.has_imu, args.namespace)
        _run(relay, sys.stdin, sys.stdout)
    except (OSError, ParameterError, ValueError) as exc:
        print(f"message-relay: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())