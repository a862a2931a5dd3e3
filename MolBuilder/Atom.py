"""
Atoms and their bond-pattern queries.

Bonds are stored as handles of neighbor atoms inside the owning molecule, so
a free atom (not added to any molecule) never has bonds.
"""

import enum
import warnings
import weakref
from collections import namedtuple

from . import Transform
from .Vec3 import Vec3
from .utils import MoleculeError


class Element(enum.IntEnum):
    H = 1
    He = 2
    Li = 3
    Be = 4
    B = 5
    C = 6
    N = 7
    O = 8
    F = 9
    Ne = 10
    Na = 11
    Mg = 12
    Al = 13
    Si = 14
    P = 15
    S = 16
    Cl = 17

    def __str__(self):
        return self.name

    def __format__(self, spec):
        return format(self.name, spec)

    @classmethod
    def from_symbol(cls, symbol):
        name = symbol.strip().capitalize()
        if name not in cls.__members__:
            raise MoleculeError(f"Unknown element '{symbol}'")
        return cls[name]


# Covalent radii (Angstrom) after R. Heyrovska, "Atomic Structures of all the
# Twenty Essential Amino Acids and a Tripeptide, with Bond Lengths as Sums of
# Atomic Covalent Radii"
BOND_RADII = {
    Element.H: 0.37,
    Element.C: 0.70,
    Element.O: 0.63,
    Element.N: 0.66,
    Element.S: 1.04,
}

BOND_TOLERANCE = 0.2


def bond_radius(elt):
    if elt not in BOND_RADII:
        raise MoleculeError(f"No bond radius is known for the element {elt}")
    return BOND_RADII[elt]


def bond_distance(elt1, elt2):
    """Average bond length between two elements."""
    if elt1 == Element.H and elt2 == Element.H:
        return 2 * BOND_RADII[Element.H]
    return bond_radius(elt1) + bond_radius(elt2)


class Match(enum.Enum):
    NONE = 'none'
    UNIQUE = 'unique'
    AMBIGUOUS = 'ambiguous'


NeighborMatch = namedtuple('NeighborMatch', ['status', 'atom'])


class Atom:
    def __init__(self, element, position, data=None):
        self.element = element
        # Vec3 -= mutates, so every atom holds its own vector
        self.position = Vec3.from_array(position)
        # opaque slot for the host application
        self.data = data
        self.handle = None
        self._molecule = None
        self._bonds = []

    @property
    def molecule(self):
        if self._molecule is None:
            return None
        return self._molecule()

    def _attach(self, molecule, handle):
        # only Molecule calls this
        if self._molecule is not None:
            raise MoleculeError("Atom already belongs to a molecule")
        self._molecule = weakref.ref(molecule)
        self.handle = handle

    def _detach(self):
        self._molecule = None
        self.handle = None
        self._bonds = []

    def copy(self):
        """Independent atom with the same element and position, without bonds."""
        return Atom(self.element, self.position)

    def transform(self, shift, rot):
        return Atom(self.element, Transform.transform(self.position, shift, rot))

    @property
    def bonds(self):
        if not self._bonds:
            return []
        molecule = self.molecule
        if molecule is None:
            raise MoleculeError("Bonded atom outlived its molecule")
        return [molecule.atom(h) for h in self._bonds]

    @property
    def bond_handles(self):
        return tuple(self._bonds)

    def nbonds(self):
        return len(self._bonds)

    def is_bond(self, other):
        dist_actual = (self.position - other.position).len()
        dist_average = bond_distance(self.element, other.element)
        if dist_actual <= dist_average - BOND_TOLERANCE:
            warnings.warn(
                f"distance between atoms {self.element}/{other.element} is too low: "
                f"dist={dist_actual:.4f} avg={dist_average} tolerance={BOND_TOLERANCE}")
        return dist_actual < dist_average + BOND_TOLERANCE

    def is_bonded_to(self, other):
        return other.handle in self._bonds and other.molecule is self.molecule

    def link(self, other):
        molecule = self.molecule
        if molecule is None or other.molecule is not molecule:
            raise MoleculeError("Only atoms of the same molecule can be linked")
        self._add_to_bonds(other)
        other._add_to_bonds(self)

    def unlink(self, other):
        self._remove_from_bonds(other)
        other._remove_from_bonds(self)

    def _add_to_bonds(self, atom):
        self._bonds.append(atom.handle)

    def _remove_from_bonds(self, atom):
        try:
            self._bonds.remove(atom.handle)
        except ValueError:
            raise MoleculeError(
                f"{self.element}->{atom.element} bond to remove isn't present") from None

    def _clear_bonds(self):
        self._bonds = []

    def apply_matrix(self, m):
        self.position = Transform.apply(m, self.position)

    def center_at(self, pt):
        self.position = self.position - pt

    def find_only_c(self):
        found = self.filter_bonds(Element.C)
        if not found:
            return NeighborMatch(Match.NONE, None)
        if len(found) > 1:
            return NeighborMatch(Match.AMBIGUOUS, None)
        return NeighborMatch(Match.UNIQUE, found[0])

    def find_first_bond(self, bond_elt):
        for a in self.bonds:
            if a.element == bond_elt:
                return a
        raise MoleculeError(f"find_first_bond: no {self.element}->{bond_elt} bond found")

    def is_bonds(self, *pattern):
        """
        Exact match of the neighborhood against (element, count) pairs.

        is_bonds(Element.C, 1, Element.H, 2) is true only for an atom bonded to
        exactly one carbon, exactly two hydrogens and nothing else.
        """
        if not pattern or len(pattern) % 2 or len(pattern) > 6:
            raise TypeError("is_bonds takes 1 to 3 (element, count) pairs")
        expected = dict(zip(pattern[::2], pattern[1::2]))
        if len(expected) != len(pattern) // 2:
            raise TypeError("is_bonds elements must not repeat")
        counts = dict.fromkeys(expected, 0)
        for a in self.bonds:
            if a.element not in counts:
                return False
            counts[a.element] += 1
        return counts == expected

    def filter_bonds(self, bond_elt):
        return [a for a in self.bonds if a.element == bond_elt]

    def filter_bonds1(self, bond_elt):
        found = self.filter_bonds(bond_elt)
        if len(found) > 1:
            raise MoleculeError(
                f"filter_bonds1: duplicate {self.element}->{bond_elt} bond when only one is expected"
                f"{self._context()}")
        if not found:
            raise MoleculeError(
                f"filter_bonds1: no {self.element}->{bond_elt} bond found when one is expected"
                f"{self._context()}")
        return found[0]

    def _context(self):
        molecule = self.molecule
        if molecule is None:
            return ""
        return f" (atom #{self.handle} of molecule '{molecule.id or molecule.descr}')"

    def __repr__(self):
        return f"Atom({self.element}, {self.position!r})"

    def __str__(self):
        return f"{{{self.element} @ {self.position}}}"
