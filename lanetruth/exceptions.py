class EmptyGeometry(ValueError):
    def __init__(self, what):
        self.what = what

        super(EmptyGeometry, self).__init__("{} is empty".format(what))

    def __reduce__(self):
        return (EmptyGeometry, (self.what,))


class OutOfRange(ValueError):
    def __init__(self, value, lower, upper):
        self.value = value
        self.lower = lower
        self.upper = upper

        super(OutOfRange, self).__init__(
            "Arc length {} is outside of [{}, {}]".format(value, lower, upper)
        )

    def __reduce__(self):
        return (OutOfRange, (self.value, self.lower, self.upper))


class NotFound(KeyError):
    def __init__(self, ID):
        self.ID = ID

        super(NotFound, self).__init__("No lane with id {} in snapshot".format(ID))

    def __str__(self):
        return self.args[0]

    def __reduce__(self):
        return (NotFound, (self.ID,))


class MalformedShape(ValueError):
    def __init__(self, ID, reason):
        self.ID = ID
        self.reason = reason

        super(MalformedShape, self).__init__(
            "Lane {} is malformed: {}".format(ID, reason)
        )

    def __reduce__(self):
        return (MalformedShape, (self.ID, self.reason))
