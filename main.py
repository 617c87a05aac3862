from src.dway_heap import DWayHeap, get_topk


distances = [10.5, 3.2, 15.0, 7.8, 20.1, 1.5]

# Create a 4-way heap, the usual choice for Dijkstra and Prim
print("Creating 4-way heap...")
heap = DWayHeap(4, distances)

# Test basic properties
print(f"Heap size: {len(heap)}")
print(f"Is empty: {heap.is_empty()}")
print(f"First leaf index: {heap.first_leaf_index()}")
print(f"Top: {heap.peek()}")
print(f"Top-3: {get_topk(heap, 3)}")

# Relax a distance, as a shortest path algorithm would
heap.update_priority(15.0, 0.5)
print(f"Top after update: {heap.peek()}")

heap.push(2.0).push(30.0)
print(f"Sorted: {heap.sorted()}")
print(f"Is empty: {heap.is_empty()}")
