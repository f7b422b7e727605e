from setuptools import setup, find_packages

setup(
    name="gaevo",
    version="0.1.0",
    packages=find_packages(include=["gaevo", "gaevo.*"]),
    python_requires=">=3.8",
    install_requires=[
        # System
        'python-dotenv',

        # Data Handling
        'numpy',
        'pandas',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
            'pytest-mock>=3.10.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'gaevo = gaevo.cli.gaevo:main',
        ],
    },
    include_package_data=True,
    description="Genetic algorithm engine for the Traveling Salesman Problem",
)
