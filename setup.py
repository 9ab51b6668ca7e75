from setuptools import find_packages, setup

setup(
    name="fusion-debug",
    version="0.1.0-alpha",
    description="Fusion Debug - Inspect deferred operation streams before fusion",
    packages=find_packages(include=["fusion_debug", "fusion_debug.*"]),
    python_requires=">=3.10",
    install_requires=["numpy", "networkx", "tabulate"],
    extras_require={"test": ["pytest", "pydot"]},
)
