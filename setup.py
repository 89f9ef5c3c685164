#!/usr/bin/env python
# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

from os import path

from setuptools import find_packages, setup


def read_file(fname):
    with open(path.join(path.dirname(__file__), fname), encoding='utf8') as f:
        return f.read()


# this sets the __version__ variable
exec(read_file(path.join('src', 'speccov', '_version.py')))

setup(
    name='pytest-speccov',
    version=__version__,  # noqa: F821
    description='pytest plugin measuring code coverage per test and rendering coverage reports.',
    license='BSD',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    author='speccov contributors',
    install_requires=[
        'coverage>=7.0',
        'pytest>=8.0',
    ],
    python_requires='>=3.11',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    entry_points={
        'pytest11': [
            'speccov = speccov.plugin',
        ]
    },
    platforms='any',
    classifiers=[
        "Framework :: Pytest",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "License :: OSI Approved :: BSD License",
        "Topic :: Software Development :: Testing",
    ],

    extras_require={
        "test": ["pytest", "pytest-cov"],
        "dev": ["nox"],
    }
)
