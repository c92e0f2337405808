"""
Building blocks of a unit.

config, events, capabilities, schema and validator are independent of each
other except that validator reads the capabilities and schema registries.
unit assembles them into the Unit base class. Import from the subpackage,
not from its internal files.
"""
