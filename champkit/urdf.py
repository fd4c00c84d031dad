"""Reading leg geometry and joint names from a robot description and parameters."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from os import PathLike
from typing import Any

from champkit.params import ParameterError

LEG_KEYS = ("left_front", "right_front", "left_hind", "right_hind")
LINKS_MAP = tuple(f"links_map.{leg}" for leg in LEG_KEYS)
JOINTS_MAP = tuple(f"joints_map.{leg}" for leg in LEG_KEYS)

Vector = tuple[float, float, float]


class UrdfError(ValueError):
    """Raised when a robot description is malformed or lacks a requested link."""


@dataclass(frozen=True)
class _Joint:
    name: str
    parent: str
    child: str
    origin: Vector


def _parse_xyz(text: str | None) -> Vector:
    if text is None:
        return (0.0, 0.0, 0.0)
    parts = text.split()
    if len(parts) != 3:
        raise UrdfError(f"origin xyz must have three values, got {text!r}")
    try:
        x, y, z = (float(p) for p in parts)
    except ValueError:
        raise UrdfError(f"origin xyz is not numeric: {text!r}") from None
    return (x, y, z)


class UrdfModel:
    """The link tree of a robot description."""

    def __init__(self, name: str, links: Sequence[str], joints: Sequence[_Joint]):
        self.name = name
        self._links = set(links)
        self._parent_joint: dict[str, _Joint] = {}
        for joint in joints:
            for end in (joint.parent, joint.child):
                if end not in self._links:
                    raise UrdfError(f"joint '{joint.name}' refers to unknown link '{end}'")
            if joint.child in self._parent_joint:
                raise UrdfError(f"link '{joint.child}' has more than one parent joint")
            self._parent_joint[joint.child] = joint
        roots = [link for link in links if link not in self._parent_joint]
        if len(roots) != 1:
            raise UrdfError(f"robot description must have exactly one root link, found {len(roots)}")
        self._root = roots[0]

    @classmethod
    def from_string(cls, text: str) -> UrdfModel:
        """Parse a robot description held in a string."""
        try:
            element = ET.fromstring(text)
        except ET.ParseError as exc:
            raise UrdfError(f"failed to parse robot description: {exc}") from None
        return cls._from_element(element)

    @classmethod
    def from_file(cls, path: str | PathLike) -> UrdfModel:
        """Parse a robot description stored in a file."""
        try:
            element = ET.parse(path).getroot()
        except ET.ParseError as exc:
            raise UrdfError(f"failed to parse robot description: {exc}") from None
        return cls._from_element(element)

    @classmethod
    def _from_element(cls, robot: ET.Element) -> UrdfModel:
        if robot.tag != "robot":
            raise UrdfError(f"expected a <robot> element, got <{robot.tag}>")
        links = []
        for link in robot.findall("link"):
            name = link.get("name")
            if not name:
                raise UrdfError("link without a name")
            links.append(name)
        joints = []
        for joint in robot.findall("joint"):
            name = joint.get("name", "")
            parent = joint.find("parent")
            child = joint.find("child")
            if parent is None or child is None:
                raise UrdfError(f"joint '{name}' needs a parent and a child")
            origin = joint.find("origin")
            xyz = _parse_xyz(origin.get("xyz") if origin is not None else None)
            joints.append(_Joint(name, parent.get("link", ""), child.get("link", ""), xyz))
        return cls(robot.get("name", ""), links, joints)

    @property
    def root(self) -> str:
        """Name of the link that has no parent."""
        return self._root

    def _joint_of(self, link: str) -> _Joint:
        if link not in self._links:
            raise UrdfError(f"unknown link '{link}'")
        try:
            return self._parent_joint[link]
        except KeyError:
            raise UrdfError(f"link '{link}' is the root and has no parent") from None

    def parent_link(self, link: str) -> str:
        """Name of the parent of link."""
        return self._joint_of(link).parent

    def joint_origin(self, link: str) -> Vector:
        """Offset of the joint that connects link to its parent."""
        return self._joint_of(link).origin


def get_pose(model: UrdfModel, ref_link: str, end_link: str) -> Vector:
    """Sum the joint offsets from ref_link down to end_link."""
    if ref_link != model.root:
        model.parent_link(ref_link)  # validates that the link exists
    x = y = z = 0.0
    current = end_link
    while current != ref_link:
        dx, dy, dz = model.joint_origin(current)
        x += dx
        y += dy
        z += dz
        current = model.parent_link(current)
    return (x, y, z)


def _string_list(params: Mapping[str, Any], key: str, length: int, what: str) -> list[str]:
    if key not in params:
        raise ParameterError(f"No {what} config file provided")
    values = list(params[key])
    if len(values) < length:
        raise ParameterError(f"parameter '{key}' needs {length} entries, got {len(values)}")
    return [str(v) for v in values[:length]]


def leg_offsets(model: UrdfModel, params: Mapping[str, Any], links_map: str) -> list[Vector]:
    """Offsets of a leg's hip, upper leg, lower leg and foot, each from its parent."""
    links = _string_list(params, links_map, 4, "links")
    refs = [model.root, *links[:3]]
    return [get_pose(model, ref, end) for ref, end in zip(refs, links)]


def load_leg_offsets(model: UrdfModel, params: Mapping[str, Any]) -> list[list[Vector]]:
    """Offsets of all four legs, in the order left front, right front, left hind, right hind."""
    return [leg_offsets(model, params, key) for key in LINKS_MAP]


def get_joint_names(params: Mapping[str, Any]) -> list[str]:
    """The twelve joint names, three per leg."""
    return [name for key in JOINTS_MAP for name in _string_list(params, key, 3, "joints")]


def get_link_names(params: Mapping[str, Any]) -> list[str]:
    """The sixteen link names, four per leg."""
    return [name for key in LINKS_MAP for name in _string_list(params, key, 4, "links")]