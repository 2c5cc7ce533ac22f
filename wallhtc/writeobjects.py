class WriteObjects:
    """Select which of the locally produced fields are written.

    objects None writes all local fields, an empty list writes nothing and
    otherwise only the listed local fields are written.
    """
    def __init__(self, local_names, objects=None):
        self.local_names = list(local_names)
        self.reset(objects)

    def reset(self, objects=None):
        self.objects = None if objects is None else list(objects)
        for name in self.unknown():
            print('Warning: object {} is not produced by this function. Known objects: {}'.format(
                name, self.local_names
                ))

    def unknown(self):
        if self.objects is None:
            return []
        return [name for name in self.objects if name not in self.local_names]

    def selected(self):
        if self.objects is None:
            return list(self.local_names)
        return [name for name in self.local_names if name in self.objects]
