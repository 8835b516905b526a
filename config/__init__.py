# Configuration package: environment settings and logging setup
