import math
import pytest
import torch

from torscan.models.atom import Atom
from torscan.models.coordinate import Coordinate
from torscan.models.topology import Topology
from torscan.utils.logger import Logger

# Planar zigzag backbone, 1.5 A bonds at 120 degrees:
# x = k * 1.299, y alternates 0 / 0.75. O in plane away from the chain,
# CB straight out of plane.
STEP_X = 1.299
STEP_Y = 0.75
BACKBONE_NAMES = ("N", "CA", "C")
RESIDUE_ATOMS = ("N", "CA", "C", "O", "CB")
N_RESIDUES = 3


def backbone_point(k):
    return (k * STEP_X, STEP_Y if k % 2 else 0.0, 0.0)


def peptide_points(n_residues=N_RESIDUES):
    points = []
    for r in range(n_residues):
        n, ca, c = (backbone_point(3 * r + i) for i in range(3))
        o_dy = 1.23 if c[1] > 0 else -1.23
        o = (c[0], c[1] + o_dy, 0.0)
        cb = (ca[0], ca[1], 1.53)
        points.extend([n, ca, c, o, cb])
    return points


def build_topology(n_residues=N_RESIDUES, with_bonds=True):
    topology = Topology()
    serial = 1
    for r in range(n_residues):
        for name in RESIDUE_ATOMS:
            topology.add_atom(Atom("ATOM", serial, name, ' ', "ALA", "A", r + 1, ' ', element=name[0]))
            serial += 1
    topology.build_hierarchy()
    if with_bonds:
        for r in range(n_residues):
            n, ca, c, o, cb = (5 * r + i for i in range(5))
            topology.add_bond(n, ca)
            topology.add_bond(ca, c)
            topology.add_bond(c, o)
            topology.add_bond(ca, cb)
            if r + 1 < n_residues:
                topology.add_bond(c, 5 * (r + 1))
    return topology


def atom_index(residue, name):
    """0-based atom index of ``name`` in 0-based ``residue`` of the test peptide."""
    return 5 * residue + RESIDUE_ATOMS.index(name)


def distance(coordinate, i, j):
    a = coordinate.get_coordinates_by_index(i)
    b = coordinate.get_coordinates_by_index(j)
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(a, b)))


def torsion(coordinate, i, j, k, l):
    """Torsion angle i-j-k-l in degrees."""
    p0, p1, p2, p3 = (coordinate.coordinates[a] for a in (i, j, k, l))
    b0 = p0 - p1
    b1 = p2 - p1
    b2 = p3 - p2
    b1 = b1 / b1.norm()
    v = b0 - (b0 @ b1) * b1
    w = b2 - (b2 @ b1) * b1
    x = float(v @ w)
    y = float(torch.linalg.cross(b1, v) @ w)
    return math.degrees(math.atan2(y, x))


@pytest.fixture
def peptide():
    """Three-residue ALA peptide (N, CA, C, O, CB per residue) with explicit bonds."""
    return build_topology(), Coordinate.from_points(peptide_points())


@pytest.fixture
def quiet_logger():
    return Logger(quiet=True)


class RecordingWriter:
    """Trajectory writer stand-in that keeps a copy of every frame."""

    def __init__(self):
        self.path = "memory"
        self.frames = []

    def write_frame(self, frame_num, coordinate):
        self.frames.append((frame_num, coordinate.copy()))


@pytest.fixture
def recording_writer():
    return RecordingWriter()
