""" Custom error classes for figwrap """

class ConfigError(Exception):
    def __init__(self, message, file_name):
        super().__init__(message)
        self.message = message
        self.file_name = file_name

class CompileError(Exception):
    def __init__(self, message, file_name):
        super().__init__(message)
        self.message = message
        self.file_name = file_name

class CommandError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message
