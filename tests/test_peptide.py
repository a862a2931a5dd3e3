import numpy as np
import pytest

from MolBuilder import Peptide, Transform
from MolBuilder.Atom import Element
from MolBuilder.Vec3 import Vec3
from MolBuilder.utils import MoleculeError, get_aminoacid_directory
from tests.utils import assert_symmetric, bond_sets, make_molecule

H, C, N, O = Element.H, Element.C, Element.N, Element.O


def test_find_aa_nterm(glycine):
    nterm = glycine.find_aa_nterm()
    assert nterm.nitrogen is glycine.atoms[0]
    assert nterm.alpha_carbon is glycine.atoms[3]
    assert nterm.hydrogen in (glycine.atoms[1], glycine.atoms[2])


def test_find_aa_cterm(glycine):
    cterm = glycine.find_aa_cterm()
    assert cterm.alpha_carbon is glycine.atoms[3]
    assert cterm.carbon is glycine.atoms[6]
    assert cterm.oxygen is glycine.atoms[7]
    assert cterm.hydroxyl_oxygen is glycine.atoms[8]
    assert cterm.hydroxyl_hydrogen is glycine.atoms[9]


def test_termini_missing(hydrogen_molecule):
    with pytest.raises(MoleculeError, match="N-terminus"):
        Peptide.find_aa_nterm(hydrogen_molecule)
    with pytest.raises(MoleculeError, match="C-terminus"):
        Peptide.find_aa_cterm(hydrogen_molecule)


def test_find_aa_last_single_residue(alanine):
    assert alanine.find_aa_last() == alanine.atoms


def test_append_amino_acid(glycine, alanine):
    chain = glycine
    cterm = chain.find_aa_cterm()
    site = cterm.hydroxyl_oxygen.position
    carbon = cterm.carbon

    chain.append_amino_acid(alanine)

    assert len(chain) == 10 - 2 + 13 - 1
    assert len(chain.bonds()) == 9 - 2 + 12 - 1 + 1
    assert_symmetric(chain)
    # the fragment was altered: capping hydrogen gone, atoms moved
    assert len(alanine) == 12
    nitrogen = [a for a in carbon.bonds if a.element == N][0]
    assert nitrogen.position.close_to(site)
    assert nitrogen.is_bonds(C, 2, H, 1)
    assert carbon.is_bonds(C, 1, N, 1, O, 1)
    assert (carbon.position - nitrogen.position).len() == pytest.approx(1.3396, abs=1e-3)


def test_append_keeps_fragment_geometry(glycine, alanine):
    before = alanine.copy()
    glycine.append_amino_acid(alanine)
    residue = glycine.find_aa_last()
    assert len(residue) == 12
    # rigid motion: all pairwise distances survive
    kept = [a for a in before.atoms if a.handle in {b.handle for b in alanine.atoms}]
    xyz = np.array([np.asarray(a.position) for a in kept])
    d_before = np.linalg.norm(xyz[:, None] - xyz[None], axis=-1)
    d_after = np.linalg.norm(alanine.positions[:, None] - alanine.positions[None], axis=-1)
    assert np.allclose(d_before, d_after)


def test_rotation_turns_stripped_bond_onto_peptide_bond(glycine, alanine):
    cterm = glycine.find_aa_cterm()
    nterm = alanine.find_aa_nterm()
    direction = (cterm.carbon.position - cterm.hydroxyl_oxygen.position).normalize()
    removed = (nterm.hydrogen.position - nterm.nitrogen.position).normalize()
    rot = Transform.rotation_between(removed, direction)
    assert Transform.apply(Transform.rotate(rot), removed).close_to(direction)


def test_chain_termini_after_append(glycine):
    first = glycine.atoms[0]
    second = Peptide.read_aminoacid('G')
    glycine.append_amino_acid(second)
    nterm = glycine.find_aa_nterm()
    assert nterm.nitrogen is first
    cterm = glycine.find_aa_cterm()
    last = glycine.find_aa_last()
    assert len(last) == 9
    assert cterm.alpha_carbon in last and cterm.hydroxyl_hydrogen in last
    assert first not in last


def test_combine():
    chain = Peptide.combine('gag')
    assert chain.descr == 'peptide GAG'
    assert len(chain) == 10 + 13 + 10 - 2 * 3
    assert len(chain.bonds()) == 9 + 12 + 9 - 2 * 2
    assert_symmetric(chain)
    assert len(chain.find_aa_last()) == 9


def test_combine_verbose(capsys):
    Peptide.combine('GG', verbose=True)
    out = capsys.readouterr().out
    assert 'residue 2: Glycine' in out


def test_combine_errors(tmp_path):
    with pytest.raises(MoleculeError, match="unknown"):
        Peptide.combine('GZ')
    with pytest.raises(MoleculeError, match="Empty"):
        Peptide.combine('')
    # valid code, but no fragment in the library
    with pytest.raises(MoleculeError, match="Unable to open"):
        Peptide.combine('W', library=tmp_path)


def test_rotating_last_residue_keeps_graph():
    chain = Peptide.combine('GGG')
    bonds = bond_sets(chain)
    m = Transform.rotate(Vec3(0.5, 0.5, -0.5))
    for _ in range(200):
        for a in chain.find_aa_last():
            a.apply_matrix(m)
    assert bond_sets(chain) == bonds
    assert all(a.molecule is chain for a in chain.atoms)


def proline_like():
    # pyrrolidine ring closed on the amino nitrogen, carboxyl on the alpha carbon
    return make_molecule(
        (N, 0.0, 1.40, 0.0),
        (H, 0.76, 1.85, -0.49),
        (C, 0.0, 0.0, 0.0),      # CA
        (H, -0.40, -0.45, 0.90),
        (C, -1.20, -0.30, -0.90),  # CB
        (C, -2.10, 0.80, -0.60),   # CG
        (C, -1.25, 1.95, -0.20),   # CD
        (C, 1.50, -0.20, 0.0),
        (O, 2.05, -1.26, 0.0),
        (O, 2.20, 0.95, 0.0),
        (H, 3.15, 0.75, 0.0),
        descr='proline-like')


def test_proline_style_nterm():
    aa = proline_like()
    nitrogen = aa.atoms[0]
    assert nitrogen.is_bonds(C, 2, H, 1)
    nterm = Peptide.find_aa_nterm(aa)
    assert nterm.nitrogen is nitrogen
    assert nterm.alpha_carbon is aa.atoms[2]
    assert nterm.hydrogen is aa.atoms[1]


def test_default_library_has_fragments():
    for code in 'GA':
        mol = Peptide.read_aminoacid(code, get_aminoacid_directory())
        assert mol.find_aa_nterm() and mol.find_aa_cterm()
