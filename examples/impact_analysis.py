"""Which nodes need re-evaluation when the chart width changes?"""

import json
from pathlib import Path

import chartdag as cd

spec = json.loads((Path(__file__).parent / "bar_chart.json").read_text())
graph = cd.build_chart_graph(spec)

for node in graph.downstream("width"):
    print(f"{node.id:<16} {node.kind}")

print(cd.render(spec))
