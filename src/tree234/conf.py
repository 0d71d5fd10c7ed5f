class Conf(dict):
    def __getattr__(self, k):
        """d.key -> d[key]"""
        try:
            return self[k]
        except KeyError:
            raise AttributeError(f"{type(self).__name__} object has no attribute {k!r}")

    def __setattr__(self, key: str, value) -> None:
        self[key] = value


default_conf = {
    "check_invariants": False,
}


def build_conf(**opts) -> Conf:
    unknown = set(opts) - set(default_conf)
    if unknown:
        raise TypeError(f"unknown tree options: {', '.join(sorted(unknown))}")
    conf = Conf(default_conf)
    conf.update(opts)
    return conf
