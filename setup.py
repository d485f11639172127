from setuptools import find_packages, setup

package_name = 'reach_ik_solver'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['tests']),
    python_requires='>=3.8',
    install_requires=[
        'setuptools',
        'numpy',
    ],
    zip_safe=True,
    maintainer='yuuki',
    maintainer_email='yuuzena@gmail.com',
    description='Two-pass reaching IK solver for a chain of rigid segments',
    license='TODO: License declaration',
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'reach_ik_solver_node = reach_ik_solver.reach_ik_solver_node:main',
        ],
    },
)
