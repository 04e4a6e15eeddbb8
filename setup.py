#!/usr/bin/env python3
from setuptools import setup, find_packages

setup(
    name='pyquads',
    version='0.1',
    description='star detection in binary masks and geometric quads for image matching',
    packages=find_packages(include=['pyquads', 'pyquads.*']),
    python_requires='>=3.9',
    install_requires=[
        'scipy',
        'pandas',
        'astropy',
        'numpy',
        'single-source',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'pytest-mock',
        ]
    }
)
