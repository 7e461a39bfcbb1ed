from setuptools import find_packages
from setuptools import setup


def get_version():
    with open("cumfreq/core.py") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"')
    raise RuntimeError("Unable to find version string")


def main():
    setup(
        name="cumfreq",
        version=get_version(),
        description="Fenwick trees for cumulative frequency tables",
        license="GPLv3+",
        classifiers=[
            "Programming Language :: Python :: 3",
            "License :: OSI Approved :: "
            "GNU General Public License v3 or later (GPLv3+)",
        ],
        python_requires=">=3.8",
        packages=find_packages(include=["cumfreq", "cumfreq.*"]),
        install_requires=["numpy", "daiquiri"],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["cumfreq=cumfreq.cli:cumfreq_main"]},
    )


if __name__ == "__main__":
    main()
