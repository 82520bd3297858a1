# This file makes the utils directory a proper Python package
