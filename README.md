# champkit

Building blocks for a four-legged robot, in plain Python with no
third-party dependencies.

- `champkit.matrix`: a small dense `Matrix` of floats with arithmetic,
  matrix product (`@`), transposition, stacking, sub-matrices,
  determinants and Gauss-Jordan inversion with partial pivoting.
  Inverting a singular matrix raises `SingularMatrixError`.
- `champkit.components`: dataclasses for a robot's state and
  configuration: `Velocities` (`Linear`, `Angular`), `Pose` (`Point`,
  `Euler`), `Quaternion`, sensor readings (`Accelerometer`, `Gyroscope`,
  `Magnetometer`) and the gait settings in `GaitConfig`.
- `champkit.timing`: `time_us()`, the wall-clock time in microseconds,
  and `map_float()` for linear rescaling between ranges.
- `champkit.params`: checked lookups in parameter collections
  (`fetch_param`, `get_array_item`, `get_struct_member`). A missing
  parameter, an index past the end of an array or a missing struct
  member raises `ParameterError`.
- `champkit.urdf`: parse a URDF robot description with `UrdfModel` and
  sum link offsets along the tree (`get_pose`, `leg_offsets`,
  `load_leg_offsets`); read the joint and link names configured for each
  leg (`get_joint_names`, `get_link_names`). A malformed description or
  an unknown link raises `UrdfError`.
- `champkit.relay`: `MessageRelay` turns raw IMU, joint and foot-contact
  readings into stamped messages (`Imu`, `MagneticField`, `JointState`,
  `JointTrajectory`, `ContactsStamped`), and a command that does the
  same over JSON lines.

## Installation

```
pip install champkit
```

To run the tests:

```
pip install "champkit[test]"
pytest
```

## Matrices

```python
from champkit.matrix import Matrix, SingularMatrixError

a = Matrix.from_rows([[4.0, 7.0], [2.0, 6.0]])
print(a.shape)          # (2, 2)
print(a.determinant())  # 10.0

identity = a @ a.inverse()
scaled = a * 2.0
flipped = a.transpose()
wide = a.hstack(a)      # 2 x 4

try:
    Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]]).inverse()
except SingularMatrixError:
    print("not invertible")
```

Elements are read and written with `a[row, col]` (or `a[row]` for the
first column). Operations on matrices of mismatched shapes raise
`ValueError`; `determinant()` and `inverse()` need a non-empty square
matrix.

## Robot configuration

```python
from champkit.components import GaitConfig, Pose
from champkit.timing import map_float

config = GaitConfig(nominal_height=0.3)   # knee_orientation defaults to ">>"
pose = Pose()

# rescale a stick reading in [-1, 1] to a speed in [-0.5, 0.5]
speed = map_float(0.25, -1.0, 1.0, -0.5, 0.5)
```

## Leg geometry from a URDF

```python
from champkit.urdf import UrdfModel, get_pose, load_leg_offsets

model = UrdfModel.from_file("robot.urdf")
print(model.root)
offset = get_pose(model, model.root, "lf_foot_link")   # (x, y, z)
```

Parameters are a flat mapping whose keys are `links_map.<leg>` and
`joints_map.<leg>`, for the legs `left_front`, `right_front`,
`left_hind` and `right_hind`, in that order. Each `links_map` entry
lists four links (hip, upper leg, lower leg, foot) and each
`joints_map` entry three joints.

- `load_leg_offsets(model, params)` gives, for each leg, the offset of
  each of its four links from the one before it (the hip from the root).
- `get_joint_names(params)` gives the twelve joint names and
  `get_link_names(params)` the sixteen link names.

A missing entry raises `ParameterError`.

## Relaying messages

```python
from champkit.relay import MessageRelay

relay = MessageRelay(joint_names, gazebo=False, has_imu=True, namespace="/go2")
print(relay.imu_frame)                    # "go2/imu_link"
state = relay.relay_joints(positions, stamp=12.5)
contacts = relay.relay_contacts([True, False, True, True])
```

With `gazebo=True` joint readings become a `JointTrajectory` command
(twelve positions, reached after 1/60 s); otherwise they become a
`JointState` for the configured joint names. `relay_imu` returns an
`(Imu, MagneticField)` pair with fixed diagonal covariances, or `None`
when `has_imu` is false. When no stamp is given, the current time is
used.

### Command line

```
champkit-relay --params params.json [--gazebo] [--no-imu] [--namespace /go2] < readings.jsonl
```

`params.json` holds the `joints_map` entries, either flat
(`"joints_map.left_front": [...]`) or nested
(`{"joints_map": {"left_front": [...]}}`). Each input line is a JSON
object with a `type` of `imu`, `joints` or `contacts`, an optional
`stamp`, and the reading itself:

```
{"type": "joints", "stamp": 1.0, "position": [0, 0.5, -1, 0, 0.5, -1, 0, 0.5, -1, 0, 0.5, -1]}
{"type": "contacts", "contacts": [true, true, false, true]}
{"type": "imu", "orientation": {"w": 1.0}, "linear_acceleration": {"z": 9.8}}
```

Each message produced is written to standard output as one line,
`{"topic": ..., "message": ...}`, on the topics `imu/data`, `imu/mag`,
`joint_states`, `joint_group_position_controller/command` and
`foot_contacts`. Errors are reported on standard error with exit
status 1.

## What this package does not do

There is no walking controller here: no gait generation, leg inverse
kinematics, body pose control or odometry. The relay does not connect
to a robot messaging system; it reads and writes JSON lines.