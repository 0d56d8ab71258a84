import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent
version_file = HERE / "version.txt"

with open(version_file, "r", encoding="utf-8") as fh:
    version = fh.readlines()[-1].strip()

with open(HERE / "README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open(HERE / "requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [
        line.strip()
        for line in fh
        if line.strip() and not line.startswith("#") and not line.startswith("-e")
    ]

test_requirements = [r for r in requirements if r.split(">")[0].split("=")[0] in ("pytest", "hypothesis")]
install_requirements = [r for r in requirements if r not in test_requirements]

setup(
    name="climb_profiler",
    version=version,
    description="Analyze road-climb elevation profiles and synthesize procedural 3D pass scenes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["climb_profiler", "climb_profiler.*"]),
    install_requires=install_requirements,
    extras_require={"test": test_requirements},
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    include_package_data=True,
    zip_safe=False,
)
