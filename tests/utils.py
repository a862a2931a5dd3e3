from MolBuilder.Atom import Atom
from MolBuilder.Molecule import Molecule
from MolBuilder.Vec3 import Vec3


def make_molecule(*records, descr='test'):
    """Molecule from (element, x, y, z) records, bonds detected."""
    mol = Molecule(descr)
    for elt, x, y, z in records:
        mol.add_atom(Atom(elt, Vec3(x, y, z)))
    mol.detect_bonds()
    return mol


def bond_sets(mol):
    return {a.handle: {b.handle for b in a.bonds} for a in mol.atoms}


def assert_symmetric(mol):
    for a in mol.atoms:
        for b in a.bonds:
            assert b in mol
            assert a in b.bonds
