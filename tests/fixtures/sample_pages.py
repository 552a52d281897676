"""Sample problem pages for scraper tests.

Each constant mimics one of the shapes the archive site has served: a
rendered difficulty badge, a page where the label only appears in embedded
JSON, and a page with no difficulty at all.
"""

PAGE_WITH_BADGE = """
<html>
<head><title>Two Sum - LeetCode</title></head>
<body>
<div class="flex">
  <div class="text-difficulty-easy">Easy</div>
  <span>Topics</span>
</div>
<p>Given an array of integers nums and an integer target...</p>
</body>
</html>
"""

PAGE_WITH_JSON_ONLY = """
<html>
<head><title>Median of Two Sorted Arrays - LeetCode</title></head>
<body>
<p>Loading...</p>
<script id="__NEXT_DATA__" type="application/json">
{"props": {"question": {"titleSlug": "median-of-two-sorted-arrays", "difficulty": "Hard"}}}
</script>
</body>
</html>
"""

PAGE_WITH_CONTEXT_ONLY = """
<html>
<head><title>Add Two Numbers - LeetCode</title></head>
<body>
<p>Level: this one is Medium for most people.</p>
</body>
</html>
"""

PAGE_WITHOUT_DETAILS = """
<html>
<head></head>
<body><p>Please sign in to continue.</p></body>
</html>
"""
