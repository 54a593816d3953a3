#!/usr/bin/env python3

from setuptools import setup, find_packages

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name='tailalign',
    version="0.1.0",
    python_requires='>=3.7',
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        'drgn>=0.0.21',
    ],
    extras_require={
        'test': ['pytest>=6.2'],
    },
    entry_points={
        'console_scripts': ['tailalign=tailalign.internal.cli:main'],
    },
    author='Delphix Platform Team',
    author_email='serapheim@delphix.com',
    description='Tail-aligned storage size and padding arithmetic',
    long_description=long_description,
    long_description_content_type="text/markdown",
    license='Apache-2.0',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
    ],
)
