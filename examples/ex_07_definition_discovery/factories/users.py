import fixtura

fixtura.define("user", lambda f: f.add_attribute("name", "Ada"), build_class="types.SimpleNamespace")
