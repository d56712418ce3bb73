import os

from setuptools import setup, find_packages


def get_version(root_dir):
    with open(os.path.join(root_dir, "VERSION")) as version_file:
        version = version_file.read().strip()
    return version


# Requirements
install_requires = [
    "torch>=2.4",
    "psutil",
]
test_requires = [
    "numpy",
    "pytest",
    "pytest-cov",
    "coverage[toml]",
    "flake8",
]

setup(
    name="bemeval",
    version=get_version("bemeval"),
    description="Evaluation options for potential operators in boundary-element solvers.",
    python_requires=">=3.8",
    tests_require=test_requires,
    extras_require={"test": test_requires},
    install_requires=install_requires,
    packages=find_packages(where=".", include=["bemeval", "bemeval.*"]),
    package_data={"bemeval": ["VERSION"]},
    include_package_data=True,
)
