"""Generate a render function from parser output and call it twice."""

from types import SimpleNamespace

from markgen import generate

tree = [
    {
        "type": "tag",
        "name": "ul",
        "attrs": {"class": {"type": "text", "content": "menu main"}},
        "content": [
            {
                "type": "tag",
                "name": "li",
                "attrs": {"data-user": {"type": "code", "content": "user"}},
                "content": [{"type": "code", "content": "__runtime.shout(label)"}],
            },
            {"type": "comment", "content": "more items later"},
        ],
    }
]

render = generate(tree, runtime=SimpleNamespace(shout=str.upper))
print(render({"user": "ada", "label": "home"}))
print(render({"user": "", "label": "about"}))

# Source text for hosts that compile it themselves
print(generate(tree, {"returnString": True}))
