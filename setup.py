import io
import re

from setuptools import find_packages, setup

__version__ = re.search(
    r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
    io.open("src/cmdgraph/version.py", encoding="utf_8_sig").read(),
).group(1)


setup(
    name="cmdgraph",
    version=__version__,
    description="cmdgraph is a Python library for recording graphs of deferred operations and executing them on asynchronous backends.",
    long_description="""cmdgraph is a Python library for recording graphs of deferred operations and executing them on asynchronous backends.""",
    package_dir={"": "src"},
    packages=find_packages("src"),
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "randomname",
        "numpy",
        "networkx",
        "dask",
        "distributed",
        "pydantic>=2",
        "typing_extensions",
    ],
    extras_require={
        "tests": ["pytest"],
    },
)
