import fixtura
from fixtura import Factory


@fixtura.define("post", build_class="types.SimpleNamespace")
def _post(f: Factory) -> None:
    f.add_attribute("title", "Hello")
    f.association("author", factory="user")
