"""
setup.py - Package Installation Configuration
==============================================
"""

from setuptools import setup
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text()
else:
    long_description = "Time-bounded branch-and-bound scheduling optimizer"

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
if requirements_file.exists():
    with open(requirements_file) as f:
        requirements = [line.strip() for line in f
                        if line.strip() and not line.startswith('#')]
else:
    requirements = [
        'numpy>=1.21.0',
        'PyYAML>=6.0',
    ]

setup(
    name='bb-scheduling-optimizer',
    version='1.0.0',
    author='Scheduling Optimization Team',
    description='Branch-and-bound optimizer for time-budgeted valve and production scheduling',
    long_description=long_description,
    long_description_content_type='text/markdown',
    py_modules=[
        'models',
        'config',
        'utils',
        'distance_oracle',
        'bb_action_catalog',
        'bb_bounding_functions',
        'bb_ledger',
        'bb_search_tree',
        'bb_subset_combiner',
        'bb_parallel',
        'optimizer',
    ],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Mathematics',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={
        'dev': [
            'pytest>=6.2.0',
            'black>=21.6b0',
            'flake8>=3.9.0',
            'mypy>=0.910',
            'coverage>=5.5',
        ],
    },
    zip_safe=False,
)
