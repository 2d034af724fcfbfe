"""Tests for the job profile registry."""

import logging

import pytest

from resumerank.ats.job_profiles import JobProfileRegistry, BUILTIN_PROFILES, DEFAULT_PROFILE_ID


class TestJobProfileRegistry:
    """Tests for built-in profile lookup."""

    def test_builtin_profiles(self):
        """Test the six built-in profiles are registered."""
        registry = JobProfileRegistry()

        assert registry.ids() == [
            'software-engineer', 'data-analyst', 'marketing-manager',
            'product-manager', 'sales-representative', 'student',
        ]
        assert 'data-analyst' in registry
        assert 'unknown' not in registry

    def test_builtin_sections_are_canonical(self):
        """Test every required section is a canonical section."""
        canonical = {'summary', 'skills', 'experience', 'education', 'projects', 'certifications'}
        for profile in BUILTIN_PROFILES.values():
            assert profile.required_sections <= canonical
            assert profile.keywords

    def test_resolve_known_profile(self):
        """Test known ids resolve to their profile."""
        profile = JobProfileRegistry().resolve('student')

        assert profile.id == 'student'
        assert profile.required_sections == frozenset({'education', 'skills', 'projects'})

    def test_resolve_unknown_profile_falls_back(self, caplog):
        """Test unknown ids fall back to the default with a warning."""
        with caplog.at_level(logging.WARNING):
            profile = JobProfileRegistry().resolve('astronaut')

        assert profile.id == DEFAULT_PROFILE_ID
        assert "Unknown job profile 'astronaut'" in caplog.text

    def test_resolve_none_uses_default_silently(self, caplog):
        """Test no id resolves to the default without a warning."""
        with caplog.at_level(logging.WARNING):
            profile = JobProfileRegistry().resolve(None)

        assert profile.id == DEFAULT_PROFILE_ID
        assert caplog.text == ""

    def test_invalid_default(self):
        """Test a default id missing from the registry is rejected."""
        with pytest.raises(ValueError):
            JobProfileRegistry(default_profile_id='astronaut')


class TestJobProfileRegistryYaml:
    """Tests for loading profiles from YAML."""

    def test_from_yaml_adds_and_overrides(self, tmp_path):
        """Test YAML profiles extend the catalog and override built-ins by id."""
        path = tmp_path / "profiles.yaml"
        path.write_text(
            "profiles:\n"
            "  devops-engineer:\n"
            "    title: DevOps Engineer\n"
            "    keywords: [Kubernetes, Terraform]\n"
            "    required_sections: [summary, skills, experience]\n"
            "    alignment_keywords: [devops, sre]\n"
            "  student:\n"
            "    keywords: [Coursework]\n"
            "    required_sections: [education]\n"
        )

        registry = JobProfileRegistry.from_yaml(path, default_profile_id='devops-engineer')

        devops = registry.resolve('devops-engineer')
        assert devops.title == 'DevOps Engineer'
        assert devops.keywords == ('Kubernetes', 'Terraform')
        assert devops.alignment_keywords == ('devops', 'sre')
        assert registry.resolve('student').keywords == ('Coursework',)
        assert registry.resolve('unknown').id == 'devops-engineer'
        assert 'software-engineer' in registry

    def test_unknown_section_rejected(self, tmp_path):
        """Test profiles naming unknown sections are rejected."""
        path = tmp_path / "profiles.yaml"
        path.write_text(
            "profiles:\n"
            "  chef:\n"
            "    keywords: [Cooking]\n"
            "    required_sections: [recipes]\n"
        )

        with pytest.raises(ValueError, match="recipes"):
            JobProfileRegistry.from_yaml(path)

    def test_missing_file(self, tmp_path):
        """Test a missing profiles file is an error."""
        with pytest.raises(FileNotFoundError):
            JobProfileRegistry.from_yaml(tmp_path / "missing.yaml")
