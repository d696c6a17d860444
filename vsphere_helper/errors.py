"""Errors that end the current command"""


class VSphereHelperError(Exception):
    """Base class; the CLI prints the message and exits non-zero"""


class ConfigError(VSphereHelperError):
    pass


class AuthenticationFailure(VSphereHelperError):
    pass


class ConnectionTimeout(VSphereHelperError):
    pass


class ConnectionFailure(VSphereHelperError):
    pass


class ObjectNotFound(VSphereHelperError):
    def __init__(self, term, name):
        super(ObjectNotFound, self).__init__(
            "%s '%s' does not exist" % (term, name))
        self.term = term
        self.name = name


class NameCollision(VSphereHelperError):
    def __init__(self, name):
        super(NameCollision, self).__init__(
            "Destination VM '%s' already exists" % name)
        self.name = name


class UnknownTaskId(VSphereHelperError):
    def __init__(self, task_id):
        super(UnknownTaskId, self).__init__("No task '%s' found." % task_id)
        self.task_id = task_id


class InvalidParameter(VSphereHelperError):
    pass


class GuestToolsNotRunning(VSphereHelperError):
    pass


class InventoryTooDeep(VSphereHelperError):
    pass
