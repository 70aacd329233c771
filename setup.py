from setuptools import find_packages, setup

# Base requirements for loading config files and orchestrating the build
base_requirements = [
    "pyyaml",
]

# Requirements for development and testing
dev_requirements = [
    "isort",
    "pytest",
]

setup(
    name="etsc",
    version="0.1.0",
    description="Build TypeScript projects with esbuild, driven by tsconfig.json",
    python_requires=">=3.10",
    packages=find_packages(include=["etsc", "etsc.*"]),
    license="MIT",
    install_requires=base_requirements,
    extras_require={
        "all": base_requirements + dev_requirements,
        "dev": dev_requirements,
    },
    entry_points={
        "console_scripts": [
            "etsc=etsc.build:cli",
        ],
    },
)
