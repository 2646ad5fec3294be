"""bootpack.

A small build utility that assembles executable Spring Boot JAR and WAR
archives from compiled classes, dependency jars and the Spring Boot loader.
"""

__all__: list[str] = ["__version__"]

__version__: str = "0.1.0"
