"""Sequencing primitives the runners are built on."""
