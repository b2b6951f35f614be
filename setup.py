from setuptools import setup, find_packages

setup(
    name="binarystore",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=["pyyaml"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "binarystore=binarystore.binarystoreclient:main",
        ],
    },
)
