import os

import pytest

from MolBuilder.Atom import Element
from MolBuilder.XyzIO import read_xyz_file
from MolBuilder.utils import get_aminoacid_directory
from tests.utils import make_molecule


@pytest.fixture
def glycine():
    return read_xyz_file(os.path.join(get_aminoacid_directory(), 'L-Glycine.xyz'))


@pytest.fixture
def alanine():
    return read_xyz_file(os.path.join(get_aminoacid_directory(), 'L-Alanine.xyz'))


@pytest.fixture
def hydrogen_molecule():
    return make_molecule((Element.H, 0.0, 0.0, 0.0), (Element.H, 0.0, 0.0, 0.74))
