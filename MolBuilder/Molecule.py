"""
Molecule: an owning container of atoms plus the bond graph inferred over them.

Atoms live in an arena keyed by stable integer handles. A bond is a pair of
handles, so removing or moving atoms never leaves references to atoms outside
the molecule.
"""

import numpy as np
from MDAnalysis.lib.distances import self_capped_distance

from .Atom import BOND_TOLERANCE, bond_radius
from .Vec3 import Vec3
from .utils import MoleculeError


class Molecule:
    def __init__(self, descr='', id=''):
        self.id = id
        self.descr = descr
        self._atoms = {}
        self._next_handle = 0

    def copy(self):
        """Deep copy of the atoms, the bond graph is not carried over."""
        res = Molecule(self.descr, self.id)
        for a in self._atoms.values():
            res.add_atom(a)
        return res

    __copy__ = copy

    def set_id(self, new_id):
        self.id = new_id

    @property
    def atoms(self):
        return list(self._atoms.values())

    def atom(self, handle):
        try:
            return self._atoms[handle]
        except KeyError:
            raise MoleculeError(f"Atom #{handle} isn't in the molecule '{self.id or self.descr}'") from None

    def num_atoms(self):
        return len(self._atoms)

    def __len__(self):
        return len(self._atoms)

    def __iter__(self):
        return iter(list(self._atoms.values()))

    def __contains__(self, atom):
        return atom.handle is not None and self._atoms.get(atom.handle) is atom

    @property
    def positions(self):
        if not self._atoms:
            return np.zeros((0, 3))
        return np.array([np.asarray(a.position) for a in self._atoms.values()])

    def bonds(self):
        """All bonds as (handle, handle) pairs, lower handle first."""
        res = []
        for a in self._atoms.values():
            for h in a.bond_handles:
                if a.handle < h:
                    res.append((a.handle, h))
        return sorted(res)

    # adding

    def _adopt(self, atom):
        atom._attach(self, self._next_handle)
        self._atoms[self._next_handle] = atom
        self._next_handle += 1
        return atom

    def add_atom(self, atom):
        """Add a copy of the atom. Bonds are not detected for single atoms."""
        return self._adopt(atom.copy())

    def add(self, other, shift=None, rot=None):
        """Add copies of all atoms of other, optionally moved, and redetect bonds."""
        moved = shift is not None or rot is not None
        shift = shift if shift is not None else Vec3()
        rot = rot if rot is not None else Vec3()
        # other may be self
        for a in list(other._atoms.values()):
            self._adopt(a.transform(shift, rot) if moved else a.copy())
        self.detect_bonds()

    def _splice(self, other):
        # copies atoms of other keeping its bond graph, returns handle map
        mapping = {}
        for a in other._atoms.values():
            mapping[a.handle] = self._adopt(a.copy())
        for h1, h2 in other.bonds():
            mapping[h1].link(mapping[h2])
        return mapping

    # bonds

    def detect_bonds(self):
        """Recompute the whole bond graph from the atom positions."""
        atoms = self.atoms
        if len(atoms) >= 2:
            max_cutoff = 2 * max(bond_radius(a.element) for a in atoms) + BOND_TOLERANCE
        for a in atoms:
            a._clear_bonds()
        if len(atoms) < 2:
            return
        pairs = self_capped_distance(self.positions.astype(np.float32), max_cutoff + 0.01,
                                     return_distances=False)
        candidates = sorted({(min(i, j), max(i, j)) for i, j in pairs if i != j})
        for i, j in candidates:
            if atoms[i].is_bond(atoms[j]):
                atoms[i].link(atoms[j])

    def detect_bonds_bruteforce(self):
        """O(n^2) bond detection without the neighbor search, used as a reference."""
        atoms = self.atoms
        for a in atoms:
            a._clear_bonds()
        for i, a in enumerate(atoms):
            for b in atoms[i + 1:]:
                if a.is_bond(b):
                    a.link(b)

    # geometry

    def apply_matrix(self, m):
        for a in self._atoms.values():
            a.apply_matrix(m)

    def center_at(self, pt):
        for a in self._atoms.values():
            a.center_at(pt)

    # lookup

    def find_first(self, elt):
        for a in self._atoms.values():
            if a.element == elt:
                return a
        return None

    def find_last(self, elt):
        for a in reversed(list(self._atoms.values())):
            if a.element == elt:
                return a
        return None

    def find_aa_nterm(self):
        from .Peptide import find_aa_nterm
        return find_aa_nterm(self)

    def find_aa_cterm(self):
        from .Peptide import find_aa_cterm
        return find_aa_cterm(self)

    def find_aa_last(self):
        from .Peptide import find_aa_last
        return find_aa_last(self)

    def append_amino_acid(self, aa):
        """Append the amino acid aa to this chain, aa is altered."""
        from .Peptide import append_amino_acid
        append_amino_acid(self, aa)

    # removal

    def _remove(self, atom, handles):
        for h in handles:
            if self._atoms[h] is atom:
                while atom.nbonds():
                    atom.unlink(atom.bonds[0])
                del self._atoms[h]
                atom._detach()
                return
        raise MoleculeError(f"Atom {atom} to remove isn't in the molecule '{self.id or self.descr}'")

    def remove_at_begin(self, atom):
        self._remove(atom, list(self._atoms))

    def remove_at_end(self, atom):
        self._remove(atom, reversed(list(self._atoms)))

    def __str__(self):
        lines = [f"molecule{{{self.id}, {self.descr}, {len(self)} atoms:"]
        for a in self._atoms.values():
            lines.append(f"  {a} bonds={a.nbonds()}")
        lines.append("}")
        return "\n".join(lines)

    def __repr__(self):
        return f"Molecule(descr={self.descr!r}, id={self.id!r}, atoms={len(self)})"
