"""
XYZ coordinate files: atom count, a comment line, then one 'symbol x y z'
record per atom. Bonds are never stored, they are detected on reading.
"""

from .Atom import Atom, Element
from .Molecule import Molecule
from .Vec3 import Vec3
from .utils import MoleculeError, open_or_fail


def parse_xyz_record(line, fname='', lineno=0):
    fields = line.split()
    try:
        if len(fields) != 4:
            raise ValueError(f"expected 4 fields, got {len(fields)}")
        x, y, z = (float(f) for f in fields[1:])
    except ValueError as e:
        raise MoleculeError(f"{fname}:{lineno}: malformed atom record '{line.strip()}': {e}") from None
    return Element.from_symbol(fields[0]), Vec3(x, y, z)


def read_xyz_file(fname):
    """Read a molecule from an XYZ file and detect its bonds."""
    with open_or_fail(fname) as f:
        lines = f.read().splitlines()

    if not lines:
        raise MoleculeError(f"The XYZ file '{fname}' is empty")
    try:
        count = int(lines[0].strip())
    except ValueError:
        raise MoleculeError(f"{fname}:1: atom count expected, got '{lines[0].strip()}'") from None
    descr = lines[1].strip() if len(lines) > 1 else ''

    molecule = Molecule(descr, id=fname)
    for lineno, line in enumerate(lines[2:], 3):
        if not line.strip():
            continue
        elt, pos = parse_xyz_record(line, fname, lineno)
        molecule.add_atom(Atom(elt, pos))

    if len(molecule) != count:
        raise MoleculeError(f"The XYZ file '{fname}' declares {count} atoms but has {len(molecule)}")

    molecule.detect_bonds()
    return molecule


def write_xyz_file(molecule, fname):
    with open_or_fail(fname, 'w') as f:
        f.write(f"{len(molecule)}\n")
        f.write(f"{molecule.descr}\n")
        for a in molecule.atoms:
            p = a.position
            f.write(f"{str(a.element):<2s} {p.x:14.8f} {p.y:14.8f} {p.z:14.8f}\n")
