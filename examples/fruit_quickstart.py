from giniforest import Dataset, DecisionTreeClassifier, grow_forest

data = Dataset(
    ["color", "diameter", "shape", "label"],
    [
        ("yellow", 4, "round", "apple"),
        ("green", 5, "long", "cucumber"),
        ("green", 10, "round", "watermelon"),
        ("yellow", 3.5, "round", "lemon"),
        ("red", 3, "round", "apple"),
    ],
)

clf = DecisionTreeClassifier().fit_dataset(data)
clf.print_tree()
for rule in clf.export_rules():
    print(rule)

forest = grow_forest(data, n_trees=50, n_vars=2, random_state=42)
print(forest.classify(("yellow", 4, "round")))
print(forest.classify(("purple", 7, "square")))

try:
    clf.export_graphviz("fruit_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
