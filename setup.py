"""trnovel lives at <https://github.com/yexiyue/TRNovel>.

trnovel
-------

Terminal reader for novels: launcher and console front-end.

"""
import pathlib

from setuptools import find_packages, setup

here = pathlib.Path(__file__).parent

about = {}
with open(here / "src" / "trnovel" / "__about__.py") as fp:
    exec(fp.read(), about)

with open(here / "requirements" / "test.txt") as f:
    tests_reqs = [line for line in f.read().split("\n") if line]

with open(here / "requirements" / "doc.txt") as f:
    doc_reqs = [line for line in f.read().split("\n") if line]

readme = (here / "README.md").read_text(encoding="utf-8")


setup(
    name=about["__title__"],
    version=about["__version__"],
    url=about["__github__"],
    download_url=about["__pypi__"],
    project_urls={
        "Documentation": about["__docs__"],
        "Code": about["__github__"],
        "Issue tracker": about["__tracker__"],
    },
    license=about["__license__"],
    author=about["__author__"],
    description=about["__description__"],
    long_description=readme,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages("src", include=["trnovel", "trnovel_launcher"]),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=["typing_extensions"],
    extras_require={"test": tests_reqs, "docs": doc_reqs},
    entry_points={
        "console_scripts": [
            "trnovel = trnovel_launcher.launcher:main",
        ],
    },
    zip_safe=False,
    keywords=about["__title__"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Operating System :: MacOS :: MacOS X",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Utilities",
        "Topic :: Text Processing",
    ],
)
