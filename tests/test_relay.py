import io
import json

import pytest

from champkit.components import Accelerometer, Gyroscope, Magnetometer, Quaternion
from champkit.relay import (
    ContactsStamped,
    JointState,
    JointTrajectory,
    MessageRelay,
    RawImu,
    frame_prefix,
    main,
)

JOINT_NAMES = [f"joint_{i}" for i in range(12)]
POSITIONS = [0.1 * i for i in range(12)]


def _raw():
    return RawImu(
        orientation=Quaternion(0.1, 0.2, 0.3, 0.9),
        linear_acceleration=Accelerometer(1.0, 2.0, 9.8),
        angular_velocity=Gyroscope(0.01, 0.02, 0.03),
        magnetic_field=Magnetometer(4.0, 5.0, 6.0),
    )


@pytest.mark.parametrize(
    "namespace, expected", [("/", ""), ("", ""), ("/robot", "robot/")]
)
def test_frame_prefix(namespace, expected):
    assert frame_prefix(namespace) == expected


def test_imu_frame_uses_namespace():
    assert MessageRelay(JOINT_NAMES, namespace="/go2").imu_frame == "go2/imu_link"
    assert MessageRelay(JOINT_NAMES).imu_frame == "imu_link"


def test_relay_imu_copies_readings():
    imu, mag = MessageRelay(JOINT_NAMES).relay_imu(_raw(), stamp=12.5)
    assert imu.header.stamp == 12.5
    assert imu.header.frame_id == "imu_link"
    assert imu.orientation == Quaternion(0.1, 0.2, 0.3, 0.9)
    assert imu.linear_acceleration == Accelerometer(1.0, 2.0, 9.8)
    assert imu.angular_velocity == Gyroscope(0.01, 0.02, 0.03)
    assert mag.magnetic_field == Magnetometer(4.0, 5.0, 6.0)
    assert mag.header == imu.header


def test_relay_imu_covariances():
    imu, mag = MessageRelay(JOINT_NAMES).relay_imu(_raw(), stamp=0.0)
    for cov, value in [
        (imu.orientation_covariance, 0.0025),
        (imu.angular_velocity_covariance, 0.000001),
        (imu.linear_acceleration_covariance, 0.0001),
        (mag.magnetic_field_covariance, 0.000001),
    ]:
        assert len(cov) == 9
        assert [cov[0], cov[4], cov[8]] == [value] * 3
        assert all(c == 0.0 for i, c in enumerate(cov) if i not in (0, 4, 8))


def test_relay_imu_without_imu_returns_none():
    assert MessageRelay(JOINT_NAMES, has_imu=False).relay_imu(_raw()) is None


def test_relay_joints_in_simulation():
    msg = MessageRelay(JOINT_NAMES, gazebo=True).relay_joints(POSITIONS + [9.0], stamp=3.0)
    assert isinstance(msg, JointTrajectory)
    assert msg.joint_names == JOINT_NAMES
    assert len(msg.points) == 1
    assert msg.points[0].positions == pytest.approx(POSITIONS)
    assert msg.points[0].time_from_start == pytest.approx(1.0 / 60.0)
    assert msg.header.stamp == 3.0


def test_relay_joints_states():
    names = JOINT_NAMES[:3]
    msg = MessageRelay(names).relay_joints(POSITIONS, stamp=1.0)
    assert isinstance(msg, JointState)
    assert msg.name == names
    assert msg.position == pytest.approx(POSITIONS[:3])


@pytest.mark.parametrize("gazebo", [True, False])
def test_relay_joints_too_few_positions(gazebo):
    with pytest.raises(ValueError):
        MessageRelay(JOINT_NAMES, gazebo=gazebo).relay_joints(POSITIONS[:5])


def test_relay_contacts():
    msg = MessageRelay(JOINT_NAMES).relay_contacts([1, 0, 1, 1, 0], stamp=2.0)
    assert isinstance(msg, ContactsStamped)
    assert msg.contacts == [True, False, True, True]
    assert msg.header.stamp == 2.0


def test_relay_contacts_too_few():
    with pytest.raises(ValueError):
        MessageRelay(JOINT_NAMES).relay_contacts([True, False])


def _params_file(tmp_path):
    legs = ["left_front", "right_front", "left_hind", "right_hind"]
    data = {
        "joints_map": {
            leg: JOINT_NAMES[3 * i:3 * i + 3] + ["foot"] for i, leg in enumerate(legs)
        }
    }
    path = tmp_path / "params.json"
    path.write_text(json.dumps(data))
    return path


def test_main_relays_lines(tmp_path, monkeypatch, capsys):
    path = _params_file(tmp_path)
    lines = [
        {"type": "joints", "position": POSITIONS, "stamp": 1.0},
        {"type": "contacts", "contacts": [True, True, False, False], "stamp": 1.0},
        {"type": "imu", "orientation": {"w": 1.0}, "stamp": 1.0},
    ]
    monkeypatch.setattr("sys.stdin", io.StringIO("\n".join(json.dumps(x) for x in lines)))
    assert main(["--params", str(path), "--namespace", "/dog"]) == 0
    out = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [o["topic"] for o in out] == [
        "joint_states", "foot_contacts", "imu/data", "imu/mag"
    ]
    assert out[0]["message"]["name"] == JOINT_NAMES
    assert out[1]["message"]["contacts"] == [True, True, False, False]
    assert out[2]["message"]["header"]["frame_id"] == "dog/imu_link"


def test_main_missing_joints_fails(tmp_path, monkeypatch, capsys):
    path = tmp_path / "params.json"
    path.write_text("{}")
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main(["--params", str(path)]) == 1
    assert "No joints config file provided" in capsys.readouterr().err