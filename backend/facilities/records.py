"""Add/remove editing for repeatable rows (equipment, area details)"""

import uuid


def new_key():
    return uuid.uuid4().hex[:12]


class RecordArrayEditor:
    """Ordered rows of one repeatable field, mirrored into the form controller

    Every row carries a stable key so a client can address rows without
    relying on indexes that shift after a removal.
    """

    def __init__(self, controller, name, row_model, keys=None):
        self.controller = controller
        self.name = name
        self.row_model = row_model
        self.rows = []
        self.keys = list(keys or [])
        self.pull()

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(zip(self.keys, self.rows))

    def default_row(self):
        return self.row_model().model_dump(mode="json")

    def add(self, row=None):
        """Append a row (default valued unless given) and return its key"""
        return self.insert(len(self.rows), row)

    def insert(self, index, row=None):
        if not 0 <= index <= len(self.rows):
            raise IndexError(f"{self.name} has no position {index}")
        key = new_key()
        self.rows.insert(index, dict(row) if row is not None else self.default_row())
        self.keys.insert(index, key)
        self.push()
        return key

    def remove(self, index):
        """Remove the row at `index`; later rows move up one place"""
        if not 0 <= index < len(self.rows):
            raise IndexError(f"{self.name} has no row {index}")
        removed = self.rows.pop(index)
        self.keys.pop(index)
        self.push()
        return removed

    def remove_key(self, key):
        return self.remove(self.index_of(key))

    def index_of(self, key):
        try:
            return self.keys.index(key)
        except ValueError:
            raise KeyError(key) from None

    def update(self, index, field, value):
        self.controller.set_field(f"{self.name}.{index}.{field}", value)

    def can_remove(self, index):
        """UI policy: the first row always stays"""
        return 0 < index < len(self.rows)

    def push(self):
        """Write local rows into the controller's bound value"""
        self.controller.bind_rows(self.name, self.rows)

    def pull(self):
        """Refresh local rows from the controller's bound value"""
        self.rows = [dict(row) for row in self.controller.watch(self.name) or []]
        # Keep keys of surviving positions, mint keys for new ones
        del self.keys[len(self.rows):]
        self.keys.extend(new_key() for _ in range(len(self.rows) - len(self.keys)))
