"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

RESOURCES_DIR = "app/Filament/Resources"

# What `php artisan make:filament-resource Employee` writes (Filament v3).
EMPLOYEE_RESOURCE = textwrap.dedent("""\
    <?php

    namespace App\\Filament\\Resources;

    use App\\Filament\\Resources\\EmployeeResource\\Pages;
    use App\\Filament\\Resources\\EmployeeResource\\RelationManagers;
    use App\\Models\\Employee;
    use Filament\\Forms;
    use Filament\\Forms\\Form;
    use Filament\\Resources\\Resource;
    use Filament\\Tables;
    use Filament\\Tables\\Table;
    use Illuminate\\Database\\Eloquent\\Builder;
    use Illuminate\\Database\\Eloquent\\SoftDeletingScope;

    class EmployeeResource extends Resource
    {
        protected static ?string $model = Employee::class;

        protected static ?string $navigationIcon = 'heroicon-o-rectangle-stack';

        public static function form(Form $form): Form
        {
            return $form
                ->schema([
                    Forms\\Components\\TextInput::make('name')
                        ->required()
                        ->maxLength(255),
                ]);
        }

        public static function table(Table $table): Table
        {
            return $table
                ->columns([
                    Tables\\Columns\\TextColumn::make('name')
                        ->searchable(),
                ])
                ->filters([
                    //
                ])
                ->actions([
                    Tables\\Actions\\EditAction::make(),
                ])
                ->bulkActions([
                    Tables\\Actions\\BulkActionGroup::make([
                        Tables\\Actions\\DeleteBulkAction::make(),
                    ]),
                ]);
        }

        public static function getRelations(): array
        {
            return [
                //
            ];
        }

        public static function getPages(): array
        {
            return [
                'index' => Pages\\ListEmployees::route('/'),
                'create' => Pages\\CreateEmployee::route('/create'),
                'edit' => Pages\\EditEmployee::route('/{record}/edit'),
            ];
        }
    }
    """)


@pytest.fixture
def employee_resource() -> str:
    """Source of a freshly generated EmployeeResource."""
    return EMPLOYEE_RESOURCE


@pytest.fixture
def laravel_project(tmp_path: Path) -> Path:
    """A temporary Laravel-like project root (has an artisan file)."""
    (tmp_path / "artisan").write_text("#!/usr/bin/env php\n<?php\n")
    (tmp_path / RESOURCES_DIR).mkdir(parents=True)
    return tmp_path


@pytest.fixture
def write_resource(laravel_project: Path):
    """Write a resource file into the project, as the generator would."""

    def _write(class_name: str = "EmployeeResource", content: str = EMPLOYEE_RESOURCE) -> Path:
        path = laravel_project / RESOURCES_DIR / f"{class_name}.php"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
