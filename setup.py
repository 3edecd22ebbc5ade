from setuptools import setup, find_packages
setup(
    name="quebec_property_lookup",
    version="0.0.1",
    package_dir={"": "src"},
    packages=find_packages("src"),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'quebec_property_lookup=quebec_property_lookup.__main__:_safe_main'
        ]
    }
)
