from setuptools import setup, find_packages

setup(
    name="graphblast",
    version="0.1.0",
    description="BLAST searches of query sequences against assembly graph nodes",
    packages=find_packages(include=["graphblast", "graphblast.*"]),
    install_requires=[
        "biopython",
        "pandas",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'graphblast=graphblast.main:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
)
