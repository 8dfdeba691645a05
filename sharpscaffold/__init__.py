"""sharpscaffold - xUnit/Moq test scaffold generator for C# classes."""

__version__ = "0.1.0"
