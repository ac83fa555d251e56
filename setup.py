from setuptools import setup, find_packages

setup(
    name="pybuildcxx",
    description="Target discovery and CMake orchestration for C++ projects",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords=["c++", "cmake"],
    python_requires=">=3.11",
    version="0.1.0",
    packages=find_packages(include=["pybuildcxx", "pybuildcxx.*"]),
    install_requires=[
        "returns>=0.22",
        "toml>=0.10",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "pybuildcxx = pybuildcxx.main:main",
            "pybuildcxx-build = pybuildcxx.main:build_main",
            "pybuildcxx-clean = pybuildcxx.main:clean_main",
            "pybuildcxx-run = pybuildcxx.main:run_main",
        ]
    },
)
