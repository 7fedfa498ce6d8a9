TEMPLATE = """
class Ghost:
    pass
"""
