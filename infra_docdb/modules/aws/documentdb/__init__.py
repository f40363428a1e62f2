from .documentdb import DocumentDB
