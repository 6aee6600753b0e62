# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>
# To install locally, use: pip3 install . --force-reinstall

import os

from setuptools import setup

# Read install_requires from requirements.txt if present
lib_folder = os.path.dirname(os.path.realpath(__file__))
requirement_path = os.path.join(lib_folder, 'requirements.txt')
install_requires = []
if os.path.isfile(requirement_path):
    with open(requirement_path) as f:
        install_requires = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setup(
    name='nativelib',
    version='0.1.0',
    description='Extracts and activates platform-specific native libraries embedded in a Python package.',
    long_description='Extracts and activates platform-specific native libraries embedded in a Python package.',
    packages=['nativelib'],
    package_dir={'': 'src'},
    python_requires='>=3.10',
    zip_safe=False,
    install_requires=install_requires,
    extras_require={'test': ['pytest']},
)
