import logging
import sys
from time import perf_counter

import pandas as pd

from giniforest import grow_forest, read_csv

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

# Cleveland heart disease data with a header row.  Columns 1, 2, 5, 6, 8, 10,
# 11 and 12 hold numeric codes for categories (sex, chest pain type, ...) and
# are read as text; column 13 is the diagnosis.
path = sys.argv[1] if len(sys.argv) > 1 else "heartdisease.csv"
names = list(pd.read_csv(path, nrows=0).columns)
nominal = {names[i]: str for i in (1, 2, 5, 6, 8, 10, 11, 12)}
data = read_csv(path, label=names[13], na_values="NA", dtype=nominal)

n_train = min(150, len(data))
train = data.take(range(n_train))
test = data.take(range(n_train, len(data)))
print(f"Size of training dataset: {len(train)}")
print(f"Size of test dataset: {len(test)}")

n_trees, n_vars = 200, 4
t0 = perf_counter()
forest = grow_forest(train, n_trees=n_trees, n_vars=n_vars, n_jobs=-1, random_state=42)
print(f"fit: {perf_counter()-t0:.3f} s")

label_index = data.schema.label_index
correct = sum(forest.predict(row) == str(row[label_index]) for row in test)
print(f"{correct} observations classified correctly")
print(f"{len(test) - correct} observations classified incorrectly")
print(f"{100 * correct // max(len(test), 1)}% success rate")
