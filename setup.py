#!/usr/bin/env python
"""
setup.py: Package setup file.

Created on 10/19/26.

Copyright (c) 2026, The CONIX Research Center
All rights reserved.

This source code is licensed under the BSD-3-Clause license found in the
LICENSE file in the root directory of this source tree.
"""

import pathlib
from setuptools import setup, find_packages

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / 'README.md').read_text(encoding='utf-8')

setup(
    name="mote-printf",
    description="Timestamped printf console for sensor network motes",
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='BSD-3-Clause',
    author="Conix Research Center",
    author_email="info@conix.io",
    python_requires='>=3.8, <4',
    packages=find_packages(exclude=['tests', 'tests.*']),
    zip_safe=False,
    platforms=["any"],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering',
        'Topic :: System :: Distributed Computing',
        'Topic :: System :: Hardware'
    ],
    keywords='mote tinyos printf serial sensor network wsn',
    entry_points = {
        'console_scripts': [
            'printfclient=printfclient.scripts.printf_client:main'
        ],
    },
    install_requires=[
        'numpy>=1',
        'pyserial>=3,<4',
        'setuptools_scm>=6.0'
    ],
    extras_require={
        'dev': [
            'bandit>=1,<2',
            'flake8>=3',
            'flake8-bugbear>=21',
            'isort>=5,<6',
            'pydocstyle>=6,<7',
            'pylint>=2'
        ],
        'test': [
            'pytest>=7'
        ]
    }
)
