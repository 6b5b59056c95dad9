# examples/basic_usage.py

from areacount import count_areas, extract_features, train_model, predict_count

# Use forward slashes OR raw string to avoid escape issues
image_path = r"C:/Users/user/Desktop/Sample 1.png"

ok, n = count_areas(image_path)
print("Count:", n if ok else "could not decode image")

print(extract_features(image_path))

train_model([image_path], [n], "area_counter_model.joblib")
print("Predicted:", predict_count(image_path, "area_counter_model.joblib"))
