from setuptools import setup
from pathlib import Path


# Read version from package
version_file = Path(__file__).parent / 'MolBuilder' / '__init__.py'
version_info = {}
if version_file.exists():
    with open(version_file) as f:
        for line in f:
            if line.startswith('__version__'):
                exec(line, version_info)
                break
__version__ = version_info.get('__version__', '1.0.0')

# Read README
readme_file = Path(__file__).parent / 'README.md'
if readme_file.exists():
    with open(readme_file, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = (
        'MolBuilder models molecules as atoms connected by inferred bonds.'
        'Main Functions:'
        '- detect bonds from 3-D coordinates'
        '- transform, merge and trim molecules'
        '- build peptide chains from amino acid fragments'
    )
INSTALL_REQUIRES = ["Biopython", "MDAnalysis>=2.0.0", "numpy>=1.19.0"]

TEST_REQUIRES = [
    # testing and coverage
    "pytest",
    "coverage",
    "pytest-cov",
]

setup(
    name="MolBuilder",
    version=__version__,
    author="MolBuilder developers",
    description="Molecular bond graphs and peptide chain assembly",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["MolBuilder"],
    package_dir={'MolBuilder': 'MolBuilder'},
    package_data={"MolBuilder": ["aminoacids/*.xyz"]},
    include_package_data=True,
    install_requires=INSTALL_REQUIRES,
    extras_require={"test": TEST_REQUIRES + INSTALL_REQUIRES,},

    classifiers=[
        # Trove classifiers
        # (https://pypi.python.org/pypi?%3Aaction=list_classifiers)
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Chemistry",
        "Intended Audience :: Science/Research",
    ],

    entry_points={
        'console_scripts': [
            'molbuilder=MolBuilder.Peptide:main',
        ]
    }
)
