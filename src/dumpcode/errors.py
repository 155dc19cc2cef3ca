# src/dumpcode/errors.py


class DumpcodeError(Exception): ...
class InvalidRootError(DumpcodeError): ...
class ConfigError(DumpcodeError): ...
class OutputError(DumpcodeError): ...
