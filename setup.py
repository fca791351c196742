from setuptools import setup, find_packages

setup(
    name="einlogic",
    version="0.1.0",
    description="Reference Einstein-summation engine over named axes for Tensor Logic",
    author="Tensor Logic Team",
    packages=find_packages(include=["einlogic", "einlogic.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "torch>=2.0.0",
    ],
    extras_require={
        "dev": ["pytest>=7.4.0"],
    },
    entry_points={
        "console_scripts": ["einlogic=einlogic.__main__:main"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
